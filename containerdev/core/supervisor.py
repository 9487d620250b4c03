"""Top-level supervision of a single containerdev run.

Interrupts are bridged into a one-shot ``CancelToken`` that the container
runner polls while the container is running. The supervisor then maps the
outcome of the run onto a process exit code.
"""

import logging
import signal
import threading
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from ..exceptions import ChildExitError, ContainerDevError

logger = logging.getLogger(__name__)


class CancelToken:
    """One-shot cancellation signal shared by a canceller and a waiter."""

    def __init__(self):
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel the token. Cancelling twice is a no-op."""
        self._event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses."""
        return self._event.wait(timeout)


class InterruptHandler:
    """Cancels a token when SIGINT is received."""

    def __init__(self, token: CancelToken):
        self.token = token
        self._original_handler = None
        self._installed = False

    def install(self) -> None:
        """Install the SIGINT handler."""
        if threading.current_thread() is not threading.main_thread():
            # signal.signal only works in the main thread
            logger.debug("Not in main thread, SIGINT handler not installed")
            return
        self._original_handler = signal.signal(signal.SIGINT, self._handle_signal)
        self._installed = True

    def restore(self) -> None:
        """Restore the original SIGINT handler."""
        if self._installed:
            signal.signal(signal.SIGINT, self._original_handler)
            self._original_handler = None
            self._installed = False

    def _handle_signal(self, signum, frame) -> None:
        logger.debug("SIGINT received, cancelling run")
        self.token.cancel()

    def __enter__(self) -> 'InterruptHandler':
        self.install()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.restore()


class Supervisor:
    """Runs one operation under cancellation and translates its outcome."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize supervisor.

        Args:
            console: Console used for error diagnostics (defaults to stderr)
        """
        self.console = console or Console(stderr=True)

    def run(self, operation: Callable[[CancelToken], object]) -> int:
        """Run ``operation`` and return the exit code for the process.

        A container that exits nonzero has its code passed through without
        a message. Other containerdev errors print a diagnostic and return
        the error's own exit code. Unexpected exceptions propagate.
        """
        token = CancelToken()
        with InterruptHandler(token):
            try:
                operation(token)
            except ChildExitError as e:
                logger.debug(f"Passing through container exit code {e.exit_code}")
                return e.exit_code
            except ContainerDevError as e:
                self.console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
                return e.exit_code
        return 0
