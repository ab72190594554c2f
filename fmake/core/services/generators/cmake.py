"""
CMake toolchain fragment for Apple cross-compilation.

The fragment is static: everything platform-specific is read from the
environment when CMake evaluates it (see ``Toolchain.cmake_environment``):

    APPLE_PLATFORM          SDK name; "macosx" keeps the native setup
    APPLE_SDK_PATH          sysroot for non-macOS builds
    SECOND_FIND_ROOT_PATH   extra CMAKE_FIND_ROOT_PATH entry
"""

from __future__ import annotations

from fmake.core.models.template import GeneratedFile

CMAKE_TOOLCHAIN_PATH = "apple.toolchain.cmake"

_APPLE_CMAKE = """\
include(Platform/Darwin)

list(APPEND CMAKE_FIND_ROOT_PATH $ENV{SECOND_FIND_ROOT_PATH})
set(CMAKE_XCODE_ATTRIBUTE_CODE_SIGNING_REQUIRED "NO")
set(CMAKE_XCODE_ATTRIBUTE_ENABLE_BITCODE "NO")

if (NOT $ENV{APPLE_PLATFORM} MATCHES "macosx")
    set(UNIX True)
    set(APPLE True)

    set(CMAKE_MACOSX_BUNDLE TRUE)
    set(CMAKE_CROSSCOMPILING TRUE)

    set(CMAKE_OSX_SYSROOT $ENV{APPLE_SDK_PATH} CACHE PATH "Sysroot used for Apple support")
endif()
"""


def render_cmake_toolchain() -> str:
    return _APPLE_CMAKE


def generate_cmake_toolchain() -> GeneratedFile:
    return GeneratedFile(
        path=CMAKE_TOOLCHAIN_PATH,
        content=render_cmake_toolchain(),
        reason="Apple cross-compilation toolchain fragment",
    )
