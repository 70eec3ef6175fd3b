"""Signal handling for the safewalk CLI.

Long walks are commonly piped into ``head`` or interrupted with Ctrl+C. The
handler records those events so that output stops at the next write and the
process exits with the conventional status instead of a traceback.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Dict, Optional

# SIGPIPE only exists on Unix-like systems
SIGPIPE: Optional[int] = getattr(signal, "SIGPIPE", None)

# Exit status reported after each handled signal, in order of precedence
EXIT_CODES: Dict[int, int] = {signal.SIGINT: 130}
if SIGPIPE is not None:
    EXIT_CODES = {SIGPIPE: 141, **EXIT_CODES}


class SignalHandler:
    """Records the signals that should stop a listing.

    Each handled signal fires once: the handler records it and puts the previous
    disposition back, so a second Ctrl+C behaves as if safewalk had never
    installed anything.

    Attributes:
        events (Dict[int, Event]): One event per handled signal, set when it arrives.
        original_handlers (Dict[int, Any]): The dispositions in place before installation.
    """

    def __init__(self) -> None:
        self.events: Dict[int, Event] = {signum: Event() for signum in EXIT_CODES}
        self.original_handlers: Dict[int, Any] = {signum: signal.getsignal(signum) for signum in EXIT_CODES}

    @property
    def sigpipe_received(self) -> bool:
        return SIGPIPE is not None and self.events[SIGPIPE].is_set()

    @property
    def sigint_received(self) -> bool:
        return self.events[signal.SIGINT].is_set()

    def interrupted(self) -> bool:
        """Report whether any handled signal has arrived."""
        return any(event.is_set() for event in self.events.values())

    def exit_code(self) -> Optional[int]:
        """Return the exit status for the first signal received, or None."""
        return next((code for signum, code in EXIT_CODES.items() if self.events[signum].is_set()), None)

    def handle(self, signum: int, frame: Optional[FrameType]) -> None:
        self.events[signum].set()
        signal.signal(signum, self.original_handlers[signum])

    def install(self) -> None:
        """Route every handled signal to :meth:`handle`."""
        for signum in EXIT_CODES:
            signal.signal(signum, self.handle)

    def reset(self) -> None:
        for event in self.events.values():
            event.clear()


# Shared by the writer and the entry point
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the handlers for SIGPIPE (where available) and SIGINT."""
    signal_handler.install()


def cleanup() -> None:
    """Point stdout at the null device after an interruption so shutdown prints nothing more."""
    if signal_handler.interrupted():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
