"""Custom exceptions for containerdev."""


class ContainerDevError(Exception):
    """Base exception for all containerdev errors."""

    exit_code = 1


class ConfigLoadError(ContainerDevError):
    """Exception raised when the config file cannot be read or parsed."""

    exit_code = 78


class ConfigBootstrapError(ContainerDevError):
    """Exception raised when an empty config file cannot be created."""

    exit_code = 73


class ProfileNotFoundError(ContainerDevError):
    """Exception raised when no profile matches the requested name."""

    exit_code = 64

    def __init__(self, name: str):
        super().__init__(f"Container '{name}' not found in config")
        self.name = name


class HostEnvironmentError(ContainerDevError):
    """Exception raised when host state needed for a run is unavailable."""

    exit_code = 71


class LaunchError(ContainerDevError):
    """Exception raised when the container runtime cannot be started."""

    exit_code = 126


class RuntimeNotFoundError(LaunchError):
    """Exception raised when the container runtime binary is not on PATH."""

    exit_code = 127


class RunCancelledError(ContainerDevError):
    """Exception raised when a run is interrupted."""

    exit_code = 130


class ChildExitError(ContainerDevError):
    """The container ran but exited with a nonzero status.

    Not a fault of containerdev itself: the supervisor passes ``exit_code``
    through as the process exit code.
    """

    def __init__(self, exit_code: int):
        super().__init__(f"Container exited with code {exit_code}")
        self.exit_code = exit_code
