"""
Interrupt handling — terminate in-flight children on Ctrl-C.

Long cross-compile invocations must not outlive the build that started
them. ``install_cancellation_handler`` replaces the default SIGINT
disposition (KeyboardInterrupt) with a handler that terminates every
process the supervisor knows about and exits with status 0.

Installation is process-wide and happens once; later calls are no-ops.
"""

from __future__ import annotations

import logging
import os
import signal
import sys
import threading

from fmake.adapters.shell.command import ProcessSupervisor

logger = logging.getLogger(__name__)

_install_lock = threading.Lock()
_installed = False


def install_cancellation_handler(supervisor: ProcessSupervisor) -> bool:
    """Install the SIGINT handler for ``supervisor``.

    Returns:
        True if the handler was installed by this call, False if one was
        already installed or the caller is not on the main thread.
    """
    global _installed

    if threading.current_thread() is not threading.main_thread():
        logger.warning("Interrupt handler can only be installed from the main thread")
        return False

    with _install_lock:
        if _installed:
            return False
        fired = threading.Event()

        def _on_interrupt(signum: int, frame: object) -> None:
            if fired.is_set():
                return
            fired.set()
            count = supervisor.terminate_all()
            logger.info("Interrupted, terminated %d process(es)", count)
            sys.stdout.flush()
            sys.stderr.flush()
            os._exit(0)

        signal.signal(signal.SIGINT, _on_interrupt)
        _installed = True

    logger.debug("SIGINT cancellation handler installed")
    return True
