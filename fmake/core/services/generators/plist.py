"""
Info.plist generator — the property list of a framework bundle.

The SDK name and version in ``DTPlatformVersion`` / ``DTSDKName`` are
resolved through the toolchain, so rendering shells out once and can
fail with ``CommandFailed`` when the SDK is not installed.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from fmake.core.models.bundle import BundleDescriptor
from fmake.core.models.platform import Platform
from fmake.core.models.template import GeneratedFile
from fmake.core.services.toolchain import Toolchain

INFO_PLIST_PATH = "Info.plist"

_PLIST_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
  <key>CFBundleDevelopmentRegion</key>
  <string>en</string>
  <key>CFBundleExecutable</key>
  <string>{name}</string>
  <key>CFBundleIdentifier</key>
  <string>{identifier}</string>
  <key>CFBundleInfoDictionaryVersion</key>
  <string>6.0</string>
  <key>CFBundleName</key>
  <string>{name}</string>
  <key>CFBundlePackageType</key>
  <string>FMWK</string>
  <key>CFBundleShortVersionString</key>
  <string>{version}</string>
  <key>CFBundleVersion</key>
  <string>1</string>
  <key>MinimumOSVersion</key>
  <string>{min_sdk_version}</string>
  <key>CFBundleSupportedPlatforms</key>
  <array>
    <string>{label}</string>
  </array>
  <key>UIDeviceFamily</key>
  <array>
{device_family}
  </array>
  <key>DTPlatformName</key>
  <string>{sdk}</string>
  <key>DTPlatformVersion</key>
  <string>{sdk_version}</string>
  <key>DTSDKName</key>
  <string>{sdk}{sdk_version}</string>
</dict>
</plist>
"""


def render_property_list(
    name: str,
    version: str,
    identifier: str,
    min_sdk_version: str,
    platform: Platform,
    toolchain: Toolchain,
) -> str:
    """Render Info.plist for a framework built for ``platform``.

    Args:
        name: Bundle and executable name.
        version: Marketing version (CFBundleShortVersionString).
        identifier: Reverse-DNS bundle identifier.
        min_sdk_version: MinimumOSVersion.
        platform: Target platform; supplies label, SDK and device families.
        toolchain: Resolver used for the SDK version.

    Raises:
        CommandFailed: The SDK version could not be resolved.
    """
    sdk_version = toolchain.sdk_version()
    device_family = "\n".join(
        f"    <integer>{int(code)}</integer>" for code in platform.device_family
    )
    return _PLIST_TEMPLATE.format(
        name=escape(name),
        identifier=escape(identifier),
        version=escape(version),
        min_sdk_version=escape(min_sdk_version),
        label=escape(platform.label),
        device_family=device_family,
        sdk=escape(platform.sdk),
        sdk_version=escape(sdk_version),
    )


def generate_property_list(bundle: BundleDescriptor, toolchain: Toolchain) -> GeneratedFile:
    content = render_property_list(
        bundle.name,
        bundle.version,
        bundle.identifier,
        bundle.min_sdk_version,
        bundle.platform,
        toolchain,
    )
    return GeneratedFile(
        path=INFO_PLIST_PATH,
        content=content,
        reason=f"Info.plist for {bundle.identifier} {bundle.version} ({bundle.platform.label})",
    )
