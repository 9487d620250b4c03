import io
import os
import signal
import time

import pytest
from rich.console import Console

from containerdev.core.supervisor import CancelToken, InterruptHandler, Supervisor
from containerdev.exceptions import (
    ChildExitError,
    ConfigLoadError,
    LaunchError,
    ProfileNotFoundError,
    RunCancelledError,
)


@pytest.fixture
def console_output():
    return io.StringIO()


@pytest.fixture
def supervisor(console_output):
    return Supervisor(console=Console(file=console_output, width=200))


def wait_for_cancel(token, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not token.cancelled and time.monotonic() < deadline:
        time.sleep(0.01)
    return token.cancelled


class TestCancelToken:
    """Tests for CancelToken."""

    def test_initially_not_cancelled(self):
        token = CancelToken()
        assert token.cancelled is False
        assert token.wait(0.01) is False

    def test_cancel_is_idempotent(self):
        """Test that cancelling twice leaves the token cancelled."""
        token = CancelToken()
        token.cancel()
        token.cancel()
        assert token.cancelled is True
        assert token.wait(0) is True


class TestInterruptHandler:
    """Tests for InterruptHandler."""

    def test_sigint_cancels_token(self):
        """Test that SIGINT cancels the token instead of raising KeyboardInterrupt."""
        token = CancelToken()
        with InterruptHandler(token):
            os.kill(os.getpid(), signal.SIGINT)
            assert wait_for_cancel(token)

    def test_second_sigint_is_noop(self):
        """Test that further interrupts leave the token cancelled."""
        token = CancelToken()
        with InterruptHandler(token):
            os.kill(os.getpid(), signal.SIGINT)
            assert wait_for_cancel(token)
            os.kill(os.getpid(), signal.SIGINT)
            time.sleep(0.05)
            assert token.cancelled is True

    def test_restore_original_handler(self):
        """Test that the original handler is restored on exit."""
        original = signal.getsignal(signal.SIGINT)
        with InterruptHandler(CancelToken()):
            assert signal.getsignal(signal.SIGINT) is not original
        assert signal.getsignal(signal.SIGINT) is original


class TestSupervisor:
    """Tests for Supervisor outcome translation."""

    def test_success_returns_zero(self, supervisor, console_output):
        assert supervisor.run(lambda token: None) == 0
        assert console_output.getvalue() == ""

    def test_operation_receives_token(self, supervisor):
        received = []
        supervisor.run(received.append)
        assert isinstance(received[0], CancelToken)

    def test_child_exit_code_passthrough(self, supervisor, console_output):
        """Test that a failing container's exit code is returned without a message."""
        def operation(token):
            raise ChildExitError(3)

        assert supervisor.run(operation) == 3
        assert console_output.getvalue() == ""

    @pytest.mark.parametrize("error, exit_code", [
        (ProfileNotFoundError("rust"), 64),
        (ConfigLoadError("bad yaml"), 78),
        (LaunchError("permission denied"), 126),
        (RunCancelledError("interrupted"), 130),
    ])
    def test_errors_print_diagnostic(self, supervisor, console_output, error, exit_code):
        """Test that other errors print a diagnostic and use their own exit code."""
        def operation(token):
            raise error

        assert supervisor.run(operation) == exit_code
        assert f"Error: {error}" in console_output.getvalue()

    def test_diagnostic_not_treated_as_markup(self, supervisor, console_output):
        def operation(token):
            raise ProfileNotFoundError("[bold]x")

        supervisor.run(operation)
        assert "[bold]x" in console_output.getvalue()

    def test_unexpected_error_propagates(self, supervisor):
        """Test that errors outside the taxonomy are not swallowed."""
        def operation(token):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            supervisor.run(operation)

    def test_handler_restored_after_error(self, supervisor):
        original = signal.getsignal(signal.SIGINT)

        def operation(token):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            supervisor.run(operation)
        assert signal.getsignal(signal.SIGINT) is original

    def test_interrupt_cancels_operation_token(self, supervisor):
        """Test that SIGINT during the operation cancels its token."""
        observed = []

        def operation(token):
            os.kill(os.getpid(), signal.SIGINT)
            observed.append(wait_for_cancel(token))

        assert supervisor.run(operation) == 0
        assert observed == [True]
