"""
Domain models — platform catalog and bundle inputs.

All models are re-exported here for convenient access:

    from fmake.core.models import Platform, ModuleHeader, GeneratedFile
"""

from fmake.core.models.bundle import (
    BundleDescriptor,
    FrameworkConfig,
    ModuleHeader,
    ToolchainInfo,
)
from fmake.core.models.platform import Arch, DeviceFamily, Platform
from fmake.core.models.template import GeneratedFile

__all__ = [
    # platform.py
    "Arch",
    # bundle.py
    "BundleDescriptor",
    "DeviceFamily",
    "FrameworkConfig",
    # template.py
    "GeneratedFile",
    "ModuleHeader",
    "Platform",
    "ToolchainInfo",
]
