"""
Framework repackager — flat framework directory to versioned bundle.

Input layout::

    MyLib.framework/
      MyLib
      Headers/
      Modules/
      Info.plist

Output layout::

    MyLib.framework/
      Versions/A/{MyLib, Headers/, Modules/, Resources/Info.plist}
      Versions/Current -> A
      MyLib     -> Versions/Current/MyLib
      Headers   -> Versions/Current/Headers
      Modules   -> Versions/Current/Modules
      Resources -> Versions/Current/Resources

This is a one-shot transformation. Running it on an already versioned
bundle fails at the move step, and a failure part-way leaves the
directory as it was at that point.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fmake.adapters.shell.filesystem import Filesystem, working_directory

logger = logging.getLogger(__name__)


def repackage_framework(path: str | Path, binary_name: str, fs: Filesystem) -> None:
    """Restructure the framework at ``path`` into the Versions/A layout.

    Raises:
        CommandFailed: A move or symlink step failed.
    """
    logger.info("Repackaging %s into versioned layout", path)
    with working_directory(path):
        fs.mkdir("Versions", "A", "Resources")
        fs.move(binary_name, "Headers", "Modules", dest="Versions/A")
        fs.move("Info.plist", dest="Versions/A/Resources")

        with working_directory("Versions"):
            fs.symlink("A", "Current")

        for entry in (binary_name, "Headers", "Modules", "Resources"):
            fs.symlink(f"Versions/Current/{entry}")
