"""Translation of config profiles into run options."""

import logging
import os
from typing import Optional

from ..exceptions import HostEnvironmentError, ProfileNotFoundError
from ..models.config import Config, ContainerProfile
from ..models.run_options import RunOptions

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Looks up profiles and derives the options to run them with."""

    def __init__(self, shell_entrypoint: Optional[str] = None):
        """Initialize resolver.

        Args:
            shell_entrypoint: If set, every resolved profile has its entrypoint
                replaced by this shell, its command cleared and stdin attached,
                so the container opens an interactive shell instead of its
                default command.
        """
        self.shell_entrypoint = shell_entrypoint

    def resolve(self, config: Config, name: str) -> RunOptions:
        """Find the profile called ``name`` and derive its run options.

        Raises:
            ProfileNotFoundError: If no profile has that name
            HostEnvironmentError: If the working directory cannot be resolved
        """
        profile = config.get_profile(name)
        if profile is None:
            raise ProfileNotFoundError(name)

        logger.debug(f"Resolved profile '{name}' to image {profile.image}")
        return self.get_run_options(profile)

    def get_run_options(self, profile: ContainerProfile) -> RunOptions:
        """Derive run options from a single profile."""
        options = RunOptions(
            name=profile.name,
            image=profile.image,
            stdin=profile.stdin,
            as_user=profile.as_user,
        )

        if profile.mount_workdir:
            cwd = self._get_workdir()
            options.volumes[cwd] = cwd
            options.work_dir = cwd

        for mount in profile.mounts:
            options.volumes[mount] = mount

        if profile.cmd:
            options.cmd = list(profile.cmd)

        if self.shell_entrypoint:
            options.entrypoint = self.shell_entrypoint
            options.cmd = []
            options.stdin = True

        return options

    def _get_workdir(self) -> str:
        """Get the current host working directory."""
        try:
            return os.getcwd()
        except OSError as e:
            raise HostEnvironmentError(f"Error getting current directory: {e}") from e
