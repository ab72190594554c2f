"""
Platform catalog — the closed set of Apple build targets.

Each platform is a ``Platform`` member; every derived fact (SDK name,
architectures, device families, minimum-version flag, CMake system
name) comes from a static table keyed by member. The tables are checked
for completeness at import time, so adding a member without filling
every table fails loudly.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Arch(StrEnum):
    """Instruction-set architectures a fat binary can contain."""

    X86_64 = "x86_64"
    ARM64 = "arm64"
    ARM64E = "arm64e"
    ARMV7K = "armv7k"
    ARM64_32 = "arm64_32"


class DeviceFamily(IntEnum):
    """UIDeviceFamily codes."""

    IPHONE = 1
    IPAD = 2
    TV = 3
    WATCH = 4
    TV_4K = 5
    MAC = 6


class Platform(StrEnum):
    """A build target. The value is the raw platform label."""

    APPLE_TV_OS = "AppleTVOS"
    APPLE_TV_SIMULATOR = "AppleTVSimulator"
    IPHONE_OS = "iPhoneOS"
    IPHONE_SIMULATOR = "iPhoneSimulator"
    MACOSX = "MacOSX"
    CATALYST = "Catalyst"
    WATCH_OS = "WatchOS"
    WATCH_SIMULATOR = "WatchSimulator"

    @classmethod
    def parse(cls, text: str) -> Platform:
        """Look up a platform by label or member name, ignoring case."""
        needle = text.strip().lower()
        for member in cls:
            if needle in (member.value.lower(), member.name.lower()):
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown platform '{text}'. Valid: {valid}")

    @property
    def label(self) -> str:
        return self.value

    @property
    def sdk(self) -> str:
        """SDK identifier passed to the SDK locator."""
        return _SDK_LABEL[self].lower()

    @property
    def archs(self) -> list[Arch]:
        return list(_ARCHS[self])

    @property
    def min_version_flag(self) -> str:
        """Linker flag name for the minimum OS version.

        Catalyst's value is a full ``platform_version`` expression rather
        than a bare flag name.
        """
        return _MIN_VERSION_FLAG[self]

    @property
    def device_family(self) -> list[DeviceFamily]:
        return list(_DEVICE_FAMILY[self])

    @property
    def cmake_system_name(self) -> str:
        return _CMAKE_SYSTEM_NAME[self]

    @property
    def is_simulator(self) -> bool:
        return self in _SIMULATORS

    @property
    def uses_versioned_bundle(self) -> bool:
        """Whether frameworks for this platform need the Versions/A layout."""
        return self in (Platform.MACOSX, Platform.CATALYST)


# Catalyst builds against the macOS SDK.
_SDK_LABEL: dict[Platform, str] = {
    Platform.APPLE_TV_OS: "AppleTVOS",
    Platform.APPLE_TV_SIMULATOR: "AppleTVSimulator",
    Platform.IPHONE_OS: "iPhoneOS",
    Platform.IPHONE_SIMULATOR: "iPhoneSimulator",
    Platform.MACOSX: "MacOSX",
    Platform.CATALYST: "MacOSX",
    Platform.WATCH_OS: "WatchOS",
    Platform.WATCH_SIMULATOR: "WatchSimulator",
}

_ARCHS: dict[Platform, tuple[Arch, ...]] = {
    Platform.APPLE_TV_OS: (Arch.ARM64,),
    # arm64 simulator slice not supported yet
    Platform.APPLE_TV_SIMULATOR: (Arch.X86_64,),
    Platform.IPHONE_OS: (Arch.ARM64, Arch.ARM64E),
    Platform.IPHONE_SIMULATOR: (Arch.X86_64, Arch.ARM64),
    Platform.MACOSX: (Arch.X86_64, Arch.ARM64),
    Platform.CATALYST: (Arch.X86_64, Arch.ARM64),
    Platform.WATCH_OS: (Arch.ARM64_32,),
    Platform.WATCH_SIMULATOR: (Arch.X86_64,),
}

_MIN_VERSION_FLAG: dict[Platform, str] = {
    Platform.APPLE_TV_OS: "tvos_version_min",
    Platform.APPLE_TV_SIMULATOR: "tvos_simulator_version_min",
    Platform.IPHONE_OS: "ios_version_min",
    Platform.IPHONE_SIMULATOR: "ios_simulator_version_min",
    Platform.MACOSX: "macosx_version_min",
    Platform.CATALYST: "platform_version mac-catalyst 14.0",
    Platform.WATCH_OS: "watchos_version_min",
    Platform.WATCH_SIMULATOR: "watchos_simulator_version_min",
}

_DEVICE_FAMILY: dict[Platform, tuple[DeviceFamily, ...]] = {
    Platform.APPLE_TV_OS: (DeviceFamily.TV, DeviceFamily.TV_4K),
    Platform.APPLE_TV_SIMULATOR: (DeviceFamily.TV, DeviceFamily.TV_4K),
    Platform.IPHONE_OS: (DeviceFamily.IPHONE, DeviceFamily.IPAD),
    Platform.IPHONE_SIMULATOR: (DeviceFamily.IPHONE, DeviceFamily.IPAD),
    Platform.MACOSX: (DeviceFamily.IPAD, DeviceFamily.MAC),
    Platform.CATALYST: (DeviceFamily.IPAD, DeviceFamily.MAC),
    Platform.WATCH_OS: (DeviceFamily.WATCH,),
    Platform.WATCH_SIMULATOR: (DeviceFamily.WATCH,),
}

_CMAKE_SYSTEM_NAME: dict[Platform, str] = {
    Platform.APPLE_TV_OS: "tvOS",
    Platform.APPLE_TV_SIMULATOR: "tvOS",
    Platform.IPHONE_OS: "iOS",
    Platform.IPHONE_SIMULATOR: "iOS",
    Platform.MACOSX: "Darwin",
    Platform.CATALYST: "Darwin",
    Platform.WATCH_OS: "watchOS",
    Platform.WATCH_SIMULATOR: "watchOS",
}

_SIMULATORS = frozenset({
    Platform.APPLE_TV_SIMULATOR,
    Platform.IPHONE_SIMULATOR,
    Platform.WATCH_SIMULATOR,
})


def _check_tables() -> None:
    tables = {
        "sdk": _SDK_LABEL,
        "archs": _ARCHS,
        "min_version_flag": _MIN_VERSION_FLAG,
        "device_family": _DEVICE_FAMILY,
        "cmake_system_name": _CMAKE_SYSTEM_NAME,
    }
    for table_name, table in tables.items():
        missing = [p.value for p in Platform if p not in table]
        if missing:
            raise RuntimeError(f"Platform table '{table_name}' is missing: {', '.join(missing)}")


_check_tables()
