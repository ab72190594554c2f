"""
Toolchain resolver — SDK and compiler locations for a platform.

Every accessor shells out to the SDK locator (``xcrun`` by default):

    <locator> --sdk <sdk> --show-sdk-path
    <locator> --sdk <sdk> --show-sdk-version
    <locator> --sdk <sdk> -f cc
    <locator> --sdk <sdk> -f c++

Nothing is cached. A missing locator or an SDK that is not installed
surfaces as ``CommandFailed``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fmake.adapters.shell.command import CommandRunner, default_environment
from fmake.core.models.bundle import ToolchainInfo
from fmake.core.models.platform import Platform

logger = logging.getLogger(__name__)

DEFAULT_LOCATOR = "xcrun"


class Toolchain:
    """Toolchain facts for one platform, resolved on demand."""

    def __init__(
        self,
        platform: Platform,
        runner: CommandRunner,
        locator: str = DEFAULT_LOCATOR,
    ) -> None:
        self.platform = platform
        self.runner = runner
        self.locator = locator

    def _query(self, *flags: str) -> str:
        return self.runner.read_first_line([self.locator, "--sdk", self.platform.sdk, *flags])

    def sdk_path(self) -> str:
        return self._query("--show-sdk-path")

    def sdk_version(self) -> str:
        return self._query("--show-sdk-version")

    def cc_path(self) -> str:
        return self._query("-f", "cc")

    def cxx_path(self) -> str:
        return self._query("-f", "c++")

    def resolve(self) -> ToolchainInfo:
        """Resolve all four facts (four locator invocations)."""
        info = ToolchainInfo(
            platform=self.platform,
            sdk_path=self.sdk_path(),
            sdk_version=self.sdk_version(),
            cc=self.cc_path(),
            cxx=self.cxx_path(),
        )
        logger.info("Resolved %s SDK %s at %s", self.platform.label, info.sdk_version, info.sdk_path)
        return info

    def cmake_environment(self, second_find_root_path: str = "") -> dict[str, str]:
        """Environment consumed by the generated CMake toolchain fragment."""
        env = default_environment()
        env.update({
            "APPLE_PLATFORM": self.platform.sdk,
            "APPLE_SDK_PATH": self.sdk_path(),
            "CC": self.cc_path(),
            "CXX": self.cxx_path(),
        })
        if second_find_root_path:
            env["SECOND_FIND_ROOT_PATH"] = second_find_root_path
        return env

    def cmake_configure_args(
        self,
        toolchain_file: str | Path,
        min_sdk_version: str,
    ) -> list[str]:
        """``-D`` definitions for a CMake configure run targeting this platform.

        The result is an argv list: values carry no shell quoting, so quote
        each item (``shlex.quote``) before joining them into a shell line.
        """
        archs = ";".join(a.value for a in self.platform.archs)
        return [
            f"-DCMAKE_TOOLCHAIN_FILE={toolchain_file}",
            f"-DCMAKE_SYSTEM_NAME={self.platform.cmake_system_name}",
            f"-DCMAKE_OSX_ARCHITECTURES={archs}",
            f"-DCMAKE_OSX_DEPLOYMENT_TARGET={min_sdk_version}",
        ]
