"""
Assemble use case — turn a built framework directory into a bundle.

The directory must already hold the framework binary and ``Headers/``.
This writes the module map and Info.plist, then repackages into the
versioned layout when the platform requires it (macOS, Catalyst).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from fmake.adapters.shell.command import CommandRunner
from fmake.adapters.shell.filesystem import Filesystem
from fmake.core.models.bundle import FrameworkConfig
from fmake.core.services.generators.modulemap import generate_module_map
from fmake.core.services.generators.plist import generate_property_list
from fmake.core.services.repackage import repackage_framework
from fmake.core.services.toolchain import Toolchain

logger = logging.getLogger(__name__)


@dataclass
class AssembleResult:
    """Result of assembling one framework bundle."""

    framework_dir: Path
    platform: str = ""
    written: list[str] = field(default_factory=list)
    repackaged: bool = False

    def to_dict(self) -> dict:
        return {
            "framework_dir": str(self.framework_dir),
            "platform": self.platform,
            "written": self.written,
            "repackaged": self.repackaged,
        }


def assemble_framework(
    framework_dir: Path,
    config: FrameworkConfig,
    runner: CommandRunner,
) -> AssembleResult:
    """Write manifests into ``framework_dir`` and repackage if needed.

    Raises:
        CommandFailed: SDK resolution or a repackaging step failed.
    """
    framework_dir = framework_dir.resolve()
    result = AssembleResult(framework_dir=framework_dir, platform=config.platform.label)
    toolchain = Toolchain(config.platform, runner, locator=config.locator)
    fs = Filesystem(runner)

    # Info.plist first so a missing SDK fails before anything is written
    generated = [
        generate_property_list(config.bundle, toolchain),
        generate_module_map(config.name, config.headers),
    ]
    for item in generated:
        target = fs.write_generated(item, framework_dir)
        logger.info("Wrote %s: %s", target, item.reason)
        result.written.append(item.path)

    if config.platform.uses_versioned_bundle:
        repackage_framework(framework_dir, config.binary_name, fs)
        result.repackaged = True

    return result
