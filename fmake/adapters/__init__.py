"""Adapters — bindings to processes, signals and the filesystem.

Public re-exports for convenient access.
"""

from fmake.adapters.shell.command import CommandFailed, CommandRunner, ProcessSupervisor
from fmake.adapters.shell.filesystem import Filesystem, working_directory
from fmake.adapters.shell.interrupt import install_cancellation_handler

__all__ = [
    "CommandFailed",
    "CommandRunner",
    "Filesystem",
    "ProcessSupervisor",
    "install_cancellation_handler",
    "working_directory",
]
