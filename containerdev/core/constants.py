"""Constants used throughout containerdev."""


# Container runtime
DEFAULT_RUNTIME = "docker"
DEFAULT_SHELL = "/bin/sh"

# Host identity files mounted read-only when mapping the invoking user
PASSWD_FILE = "/etc/passwd"
GROUP_FILE = "/etc/group"

# Configuration
CONFIG_FILE_NAME = "containerdev.yaml"
CONFIG_ENV_VAR = "CONTAINERDEV_CONFIG"
RUNTIME_ENV_VAR = "CONTAINERDEV_RUNTIME"

# Seconds between SIGTERM and SIGKILL when a run is cancelled
CANCEL_GRACE_PERIOD = 10.0
# Seconds between cancellation checks while the container runs
POLL_INTERVAL = 0.1
