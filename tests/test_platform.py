"""
Tests for the platform catalog — pure mapping rules per platform.
"""

import pytest

from fmake.core.models.platform import Arch, DeviceFamily, Platform


class TestTotality:
    @pytest.mark.parametrize("platform", list(Platform))
    def test_every_fact_defined(self, platform: Platform):
        assert platform.sdk
        assert platform.archs
        assert platform.device_family
        assert platform.min_version_flag
        assert platform.cmake_system_name

    @pytest.mark.parametrize("platform", list(Platform))
    def test_stable_across_calls(self, platform: Platform):
        assert platform.archs == platform.archs
        assert platform.device_family == platform.device_family
        assert platform.sdk == platform.sdk

    def test_returned_lists_are_copies(self):
        archs = Platform.IPHONE_OS.archs
        archs.append(Arch.ARMV7K)
        assert Platform.IPHONE_OS.archs == [Arch.ARM64, Arch.ARM64E]

    def test_closed_set(self):
        assert [p.value for p in Platform] == [
            "AppleTVOS",
            "AppleTVSimulator",
            "iPhoneOS",
            "iPhoneSimulator",
            "MacOSX",
            "Catalyst",
            "WatchOS",
            "WatchSimulator",
        ]


class TestSdk:
    def test_lowercased_label(self):
        assert Platform.IPHONE_OS.sdk == "iphoneos"
        assert Platform.APPLE_TV_SIMULATOR.sdk == "appletvsimulator"
        assert Platform.WATCH_OS.sdk == "watchos"

    def test_catalyst_uses_macos_sdk(self):
        assert Platform.CATALYST.sdk == Platform.MACOSX.sdk == "macosx"

    def test_label_is_raw_value(self):
        assert Platform.CATALYST.label == "Catalyst"


class TestArchs:
    @pytest.mark.parametrize(
        "platform, expected",
        [
            (Platform.APPLE_TV_OS, ["arm64"]),
            (Platform.APPLE_TV_SIMULATOR, ["x86_64"]),
            (Platform.IPHONE_OS, ["arm64", "arm64e"]),
            (Platform.IPHONE_SIMULATOR, ["x86_64", "arm64"]),
            (Platform.MACOSX, ["x86_64", "arm64"]),
            (Platform.CATALYST, ["x86_64", "arm64"]),
            (Platform.WATCH_OS, ["arm64_32"]),
            (Platform.WATCH_SIMULATOR, ["x86_64"]),
        ],
    )
    def test_order(self, platform: Platform, expected: list[str]):
        assert [a.value for a in platform.archs] == expected

    def test_tv_simulator_has_no_arm64(self):
        assert Arch.ARM64 not in Platform.APPLE_TV_SIMULATOR.archs


class TestDeviceFamily:
    def test_codes(self):
        assert [int(d) for d in DeviceFamily] == [1, 2, 3, 4, 5, 6]

    @pytest.mark.parametrize("platform", [Platform.IPHONE_OS, Platform.IPHONE_SIMULATOR])
    def test_phone(self, platform: Platform):
        assert platform.device_family == [DeviceFamily.IPHONE, DeviceFamily.IPAD]

    @pytest.mark.parametrize("platform", [Platform.MACOSX, Platform.CATALYST])
    def test_desktop(self, platform: Platform):
        assert platform.device_family == [DeviceFamily.IPAD, DeviceFamily.MAC]
        assert DeviceFamily.IPHONE not in platform.device_family

    @pytest.mark.parametrize("platform", [Platform.WATCH_OS, Platform.WATCH_SIMULATOR])
    def test_watch(self, platform: Platform):
        assert platform.device_family == [DeviceFamily.WATCH]

    @pytest.mark.parametrize("platform", [Platform.APPLE_TV_OS, Platform.APPLE_TV_SIMULATOR])
    def test_tv(self, platform: Platform):
        assert [int(d) for d in platform.device_family] == [3, 5]


class TestMinVersionFlag:
    def test_simple_names(self):
        assert Platform.IPHONE_OS.min_version_flag == "ios_version_min"
        assert Platform.IPHONE_SIMULATOR.min_version_flag == "ios_simulator_version_min"
        assert Platform.MACOSX.min_version_flag == "macosx_version_min"
        assert Platform.APPLE_TV_SIMULATOR.min_version_flag == "tvos_simulator_version_min"
        assert Platform.WATCH_OS.min_version_flag == "watchos_version_min"

    def test_catalyst_is_expression(self):
        assert Platform.CATALYST.min_version_flag == "platform_version mac-catalyst 14.0"
        assert len(Platform.CATALYST.min_version_flag.split()) == 3


class TestCmakeSystemName:
    def test_families(self):
        assert Platform.APPLE_TV_OS.cmake_system_name == "tvOS"
        assert Platform.IPHONE_SIMULATOR.cmake_system_name == "iOS"
        assert Platform.CATALYST.cmake_system_name == "Darwin"
        assert Platform.WATCH_SIMULATOR.cmake_system_name == "watchOS"


class TestDerivedFlags:
    def test_is_simulator(self):
        simulators = {p for p in Platform if p.is_simulator}
        assert simulators == {
            Platform.APPLE_TV_SIMULATOR,
            Platform.IPHONE_SIMULATOR,
            Platform.WATCH_SIMULATOR,
        }

    def test_versioned_bundle(self):
        versioned = {p for p in Platform if p.uses_versioned_bundle}
        assert versioned == {Platform.MACOSX, Platform.CATALYST}


class TestParse:
    @pytest.mark.parametrize("text", ["iPhoneOS", "iphoneos", "IPHONE_OS", " iphoneos "])
    def test_accepts_label_or_name(self, text: str):
        assert Platform.parse(text) is Platform.IPHONE_OS

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown platform 'android'"):
            Platform.parse("android")
