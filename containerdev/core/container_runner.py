"""Container running functionality."""

import logging
import os
import shlex
import subprocess
from typing import List, Optional

from ..exceptions import (
    ChildExitError,
    LaunchError,
    RunCancelledError,
    RuntimeNotFoundError,
)
from ..models.run_options import RunOptions
from .constants import (
    CANCEL_GRACE_PERIOD,
    DEFAULT_RUNTIME,
    GROUP_FILE,
    PASSWD_FILE,
    POLL_INTERVAL,
)
from .supervisor import CancelToken

logger = logging.getLogger(__name__)


class ContainerRunner:
    """Builds container runtime invocations and runs them in the foreground."""

    def __init__(self, runtime: str = DEFAULT_RUNTIME, grace_period: float = CANCEL_GRACE_PERIOD):
        """Initialize container runner.

        Args:
            runtime: Container runtime binary, looked up on PATH
            grace_period: Seconds to wait after SIGTERM before killing a
                cancelled run
        """
        self.runtime = runtime
        self.grace_period = grace_period

    def _get_user_args(self) -> List[str]:
        """Get arguments mapping the invoking host user into the container."""
        uid = os.geteuid()
        gid = os.getegid()
        return [
            '-v', f'{PASSWD_FILE}:{PASSWD_FILE}:ro',
            '-v', f'{GROUP_FILE}:{GROUP_FILE}:ro',
            '-u', f'{uid}:{gid}',
        ]

    def build_args(self, options: RunOptions) -> List[str]:
        """Build the runtime arguments for a run.

        The order is fixed: flags first, then the image, then the command.
        Volume flags follow the insertion order of ``options.volumes``.
        """
        args = ['run', '--rm']

        if options.as_user:
            args.extend(self._get_user_args())

        if options.name:
            args.extend(['--name', options.name])

        if options.stdin:
            args.append('-i')

        if options.tty:
            args.append('-t')

        if options.entrypoint:
            args.extend(['--entrypoint', options.entrypoint])

        for host_path, container_path in options.volumes.items():
            args.extend(['-v', f'{host_path}:{container_path}'])

        if options.work_dir:
            args.extend(['-w', options.work_dir])

        args.append(options.image)

        if options.cmd:
            args.extend(options.cmd)

        return args

    def build_command(self, options: RunOptions) -> List[str]:
        """Build the full command line, runtime binary included."""
        return [self.runtime] + self.build_args(options)

    def format_command(self, options: RunOptions) -> str:
        """Format the command line as a shell-escaped string."""
        return shlex.join(self.build_command(options))

    def run(self, options: RunOptions, token: CancelToken) -> int:
        """Run a container with the standard streams passed through.

        Args:
            options: Run options for the container
            token: Cancelling this token stops the container

        Returns:
            0 when the container exits successfully

        Raises:
            LaunchError: If the runtime cannot be started
            ChildExitError: If the container exits nonzero
            RunCancelledError: If the run was stopped through the token
        """
        command = self.build_command(options)
        logger.debug(f"Executing: {shlex.join(command)}")

        try:
            process = subprocess.Popen(command)
        except FileNotFoundError as e:
            raise RuntimeNotFoundError(
                f"Container runtime '{self.runtime}' not found in PATH"
            ) from e
        except OSError as e:
            raise LaunchError(f"Failed to start container runtime '{self.runtime}': {e}") from e

        exit_code = self._wait(process, token)
        if exit_code is None:
            raise RunCancelledError("Container run was interrupted")

        if exit_code < 0:
            # Terminated by a signal, report it the way shells do
            exit_code = 128 - exit_code

        if exit_code != 0:
            logger.debug(f"Container exited with code: {exit_code}")
            raise ChildExitError(exit_code)

        return 0

    def _wait(self, process: subprocess.Popen, token: CancelToken) -> Optional[int]:
        """Wait for the process to exit.

        Returns:
            The process return code, or None if it was stopped because the
            token was cancelled
        """
        while True:
            exit_code = process.poll()
            if exit_code is not None:
                return exit_code
            if token.wait(POLL_INTERVAL):
                break

        self._stop(process)
        return None

    def _stop(self, process: subprocess.Popen) -> None:
        """Terminate the process, killing it if it outlives the grace period."""
        logger.debug(f"Stopping container runtime (pid {process.pid})")
        process.terminate()
        try:
            process.wait(timeout=self.grace_period)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"Container runtime did not exit within {self.grace_period}s, killing it"
            )
            process.kill()
            process.wait()
