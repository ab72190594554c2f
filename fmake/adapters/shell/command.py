"""
Shell command runner — synchronous execution through a POSIX shell.

Every side effect in fmake eventually lands here: toolchain queries,
directory moves, symlinks. The runner blocks until the child exits and
raises ``CommandFailed`` when the exit code is not the expected one.

Live children are tracked by a ``ProcessSupervisor`` so that an
interrupt can terminate them before the program exits (see
``fmake.adapters.shell.interrupt``).
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
import time
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import IO, Any

import click
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"

# Anything subprocess.Popen accepts for stdin/stdout/stderr
Stream = int | IO[Any] | None


class CommandFailed(Exception):
    """Raised when a command exits with an unexpected status code."""

    def __init__(self, command: str, exit_code: int, expected_exit_code: int = 0) -> None:
        self.command = command
        self.exit_code = exit_code
        self.expected_exit_code = expected_exit_code
        super().__init__(
            f"Command exited with {exit_code} (expected {expected_exit_code}): {command}"
        )


class CommandResult(BaseModel):
    """Outcome of a command that exited with the expected status."""

    command: str
    exit_code: int = 0
    stdout: str = ""             # only populated when stdout was piped
    stderr: str = ""             # only populated when stderr was piped
    duration_ms: int = 0

    def first_line(self) -> str:
        """First non-empty line of captured stdout, or ``""``."""
        for line in self.stdout.split("\n"):
            if line:
                return line
        return ""


@contextmanager
def _interrupts_deferred() -> Iterator[bool]:
    """Hold SIGINT delivery until the block exits.

    Only the main thread runs Python signal handlers, so the mask is
    applied there and nowhere else. Yields whether SIGINT was blocked.
    """
    if (
        threading.current_thread() is not threading.main_thread()
        or not hasattr(signal, "pthread_sigmask")
    ):
        yield False
        return
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGINT})
    try:
        yield True
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


def _unblock_interrupts() -> None:
    # children inherit the signal mask across exec
    signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGINT})


class ProcessSupervisor:
    """Registry of in-flight child processes.

    Spawning and registration happen under one lock with SIGINT held
    back, so the interrupt handler never observes a started child that
    is not yet registered. The lock is reentrant because the handler
    runs on the main thread and may fire while the main flow holds it.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._processes: list[subprocess.Popen] = []

    def spawn(self, args: Sequence[str], **popen_kwargs: Any) -> subprocess.Popen:
        """Start a process and register it."""
        with _interrupts_deferred() as deferred, self._lock:
            if deferred:
                popen_kwargs.setdefault("preexec_fn", _unblock_interrupts)
            proc = subprocess.Popen(list(args), **popen_kwargs)
            self._processes.append(proc)
            return proc

    def release(self, proc: subprocess.Popen) -> None:
        """Forget a finished process."""
        with _interrupts_deferred(), self._lock:
            self._processes = [p for p in self._processes if p.pid != proc.pid]

    def live(self) -> list[subprocess.Popen]:
        """Snapshot of the registered processes."""
        with self._lock:
            return list(self._processes)

    def terminate_all(self) -> int:
        """Send a terminate request to every registered process.

        Returns:
            Number of processes signalled.
        """
        signalled = 0
        for proc in self.live():
            if proc.poll() is not None:
                continue
            try:
                proc.terminate()
                signalled += 1
            except ProcessLookupError:
                # exited between poll() and terminate()
                pass
        logger.debug("Terminated %d in-flight process(es)", signalled)
        return signalled

    def __len__(self) -> int:
        with self._lock:
            return len(self._processes)


def default_environment() -> dict[str, str]:
    """The minimal environment handed to children: ``PATH`` only."""
    return {"PATH": os.environ.get("PATH", "")}


def join_command(command: str | Sequence[str]) -> str:
    """Join command tokens into a single shell line."""
    if isinstance(command, str):
        return command
    return " ".join(command)


class CommandRunner:
    """Run shell command lines synchronously.

    Args:
        supervisor: Registry that tracks the children this runner starts.
        shell_path: Shell used as ``<shell_path> -c <line>``.
    """

    def __init__(
        self,
        supervisor: ProcessSupervisor | None = None,
        shell_path: str = DEFAULT_SHELL,
    ) -> None:
        self.supervisor = supervisor if supervisor is not None else ProcessSupervisor()
        self.shell_path = shell_path

    def run(
        self,
        command: str | Sequence[str],
        *,
        stdin: Stream = None,
        stdout: Stream = None,
        stderr: Stream = None,
        env: Mapping[str, str] | None = None,
        expected_exit_code: int = 0,
        silent: bool = False,
    ) -> CommandResult:
        """Execute a command line and wait for it to exit.

        Streams left as ``None`` are inherited from this process, or
        discarded when ``silent`` is set.

        Raises:
            CommandFailed: The exit code differs from ``expected_exit_code``,
                or the shell could not be started (reported as 127).
        """
        line = join_command(command)
        if not silent:
            click.echo(line)

        discard = subprocess.DEVNULL if silent else None
        logger.debug("Executing: %s (shell=%s)", line, self.shell_path)
        start = time.monotonic()

        try:
            proc = self.supervisor.spawn(
                [self.shell_path, "-c", line],
                stdin=stdin if stdin is not None else discard,
                stdout=stdout if stdout is not None else discard,
                stderr=stderr if stderr is not None else discard,
                env=dict(env) if env is not None else default_environment(),
            )
        except OSError as e:
            # same status a shell reports for a command it cannot run
            logger.debug("Could not start %s: %s", self.shell_path, e)
            click.echo(f"Unexpected exit code 127: {line}")
            raise CommandFailed(line, 127, expected_exit_code) from e
        try:
            out, err = proc.communicate()
        finally:
            self.supervisor.release(proc)

        duration_ms = int((time.monotonic() - start) * 1000)
        exit_code = proc.returncode
        logger.debug("Exit %d after %dms: %s", exit_code, duration_ms, line)

        if exit_code != expected_exit_code:
            click.echo(f"Unexpected exit code {exit_code}: {line}")
            raise CommandFailed(line, exit_code, expected_exit_code)

        return CommandResult(
            command=line,
            exit_code=exit_code,
            stdout=_decode(out),
            stderr=_decode(err),
            duration_ms=duration_ms,
        )

    def read_first_line(self, command: str | Sequence[str]) -> str:
        """Run silently and return the first non-empty line of stdout."""
        result = self.run(command, stdout=subprocess.PIPE, silent=True)
        return result.first_line()


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")
