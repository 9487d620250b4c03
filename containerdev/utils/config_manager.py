"""Configuration management utilities."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..exceptions import ConfigBootstrapError, ConfigLoadError
from ..models.config import Config

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Get the per-user config file location.

    Follows the XDG base directory convention: ``$XDG_CONFIG_HOME`` when set,
    ``~/.config`` otherwise.
    """
    config_home = os.environ.get('XDG_CONFIG_HOME')
    if config_home:
        return Path(config_home) / CONFIG_FILE_NAME
    return Path.home() / '.config' / CONFIG_FILE_NAME


class ConfigManager:
    """Loads the containerdev config file."""

    def __init__(self, config_file: Path):
        """Initialize config manager."""
        self.config_file = Path(config_file)

    def load(self) -> Config:
        """Load the config, writing an empty one first if it does not exist.

        Raises:
            ConfigBootstrapError: If the empty config cannot be written
            ConfigLoadError: If the file cannot be read or is invalid
        """
        text = self._read_text()
        if text is None:
            self.write_empty_config()
            text = self._read_text() or ""

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Error decoding config file {self.config_file}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config file {self.config_file} must contain a mapping")

        try:
            config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid config file {self.config_file}: {e}") from e

        duplicates = config.duplicate_names()
        if duplicates:
            logger.warning(
                f"Duplicate container names in {self.config_file}, "
                f"only the first of each is used: {', '.join(duplicates)}"
            )

        return config

    def _read_text(self) -> Optional[str]:
        """Read the config file, or return None if it does not exist."""
        try:
            return self.config_file.read_text()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise ConfigLoadError(f"Error opening config file {self.config_file}: {e}") from e

    def write_empty_config(self) -> None:
        """Create the config file with no containers in it."""
        logger.info(f"Creating empty config file at {self.config_file}")
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w') as f:
                yaml.safe_dump(Config().model_dump(), f, default_flow_style=False)
        except OSError as e:
            raise ConfigBootstrapError(
                f"Error writing empty config file {self.config_file}: {e}"
            ) from e
