"""
Filesystem operations used by bundle assembly.

Directory creation, moves and symlinks go through the shell runner so
that failures surface as ``CommandFailed`` like every other step.
Writing text is done in-process; generated artifacts get their parent
directory through ``mkdir`` first.
"""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fmake.adapters.shell.command import CommandRunner
from fmake.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)


@contextmanager
def working_directory(path: str | Path) -> Iterator[Path]:
    """Change into ``path`` for the duration of the block.

    The previous working directory is restored on every exit path,
    including exceptions raised inside the block.
    """
    previous = Path.cwd()
    os.chdir(path)
    logger.debug("cd %s", path)
    try:
        yield Path.cwd()
    finally:
        os.chdir(previous)
        logger.debug("cd %s", previous)


class Filesystem:
    """Shell-backed filesystem primitives.

    Relative paths resolve against the current working directory, which
    is why callers usually wrap a sequence of calls in
    ``working_directory``.
    """

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def mkdir(self, *parts: str) -> None:
        """Create the directory ``parts`` joined by ``/``, with parents."""
        self.runner.run(["mkdir", "-p", shlex.quote("/".join(parts))])

    def move(self, *sources: str, dest: str) -> None:
        """Move one or more paths into ``dest``."""
        if not sources:
            raise ValueError("move() needs at least one source")
        self.runner.run(["mv", *(shlex.quote(s) for s in sources), shlex.quote(dest)])

    def symlink(self, target: str, link_name: str | None = None) -> None:
        """Create a symlink to ``target``.

        Without ``link_name`` the link is named after the last component
        of ``target`` and created in the current directory.
        """
        tokens = ["ln", "-s", shlex.quote(target)]
        if link_name is not None:
            tokens.append(shlex.quote(link_name))
        self.runner.run(tokens)

    def write_text(self, content: str, path: str | Path) -> Path:
        """Write ``content`` as UTF-8. The parent directory must exist."""
        target = Path(path)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %d bytes to %s", len(content), target)
        return target

    def write_generated(self, item: GeneratedFile, root: str | Path) -> Path:
        """Write a generated artifact under ``root``, creating its directory."""
        target = Path(root) / item.path
        if not target.parent.is_dir():
            self.mkdir(str(target.parent))
        return self.write_text(item.content, target)
