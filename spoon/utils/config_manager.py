"""Configuration management utilities."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..core.constants import DEFAULT_CONFIG_PATH
from ..models.options import SpoonOptions
from ..services.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads the spoon config file and overlays CLI flags on top of it."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize config manager.

        Args:
            config_file: Config path given on the command line, or None to
                use the default dotfile
        """
        self.explicit = config_file is not None
        self.config_file = Path(config_file or DEFAULT_CONFIG_PATH).expanduser()

    def load_config(self) -> Dict[str, Any]:
        """Read the YAML config file into a dictionary of option values.

        Returns:
            Option values keyed by their underscore name. Empty when the
            default config file does not exist.

        Raises:
            ConfigError: If the file is unreadable, malformed or missing
                after being named explicitly
        """
        if not self.config_file.exists():
            if self.explicit:
                raise ConfigError(f"Config file not found: {self.config_file}")
            logger.debug(f"No config file at {self.config_file}, using defaults")
            return {}

        try:
            data = yaml.safe_load(self.config_file.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {self.config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {self.config_file} must contain a mapping of options"
            )
        return {str(key).replace("-", "_"): value for key, value in data.items()}

    def resolve_options(self, overrides: Optional[Dict[str, Any]] = None) -> SpoonOptions:
        """Merge defaults, the config file and CLI overrides.

        Args:
            overrides: Values given on the command line. None values mean
                the flag was not passed and are ignored.

        Returns:
            Immutable options for this invocation

        Raises:
            ConfigError: If the merged values are invalid
        """
        values = self.load_config()
        given = {key: value for key, value in (overrides or {}).items() if value is not None}
        values.update(given)
        values["config"] = self.config_file

        try:
            return SpoonOptions(**values)
        except ValidationError as e:
            bad_keys = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            source = "command line options" if bad_keys & set(given) else str(self.config_file)
            raise ConfigError(f"Invalid configuration in {source}:\n{e}") from e
