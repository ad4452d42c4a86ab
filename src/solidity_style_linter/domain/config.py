"""Configuration loader for the host config mapping."""

import logging
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

from solidity_style_linter.domain.constants import CONFIG_SECTION

logger = logging.getLogger(__name__)


class ConfigurationLoader:
    """
    Singleton that loads the rule config mapping from pyproject.toml.

    Looks for the [tool.solidity-style-linter] section in the nearest
    pyproject.toml at or above the working directory. Ignore patterns are
    compiled in and never read from here.
    """

    _instance: ClassVar[Optional["ConfigurationLoader"]] = None
    _config: ClassVar[dict[str, Any]] = {}
    _config_file: ClassVar[Optional[Path]] = None

    def __new__(cls) -> "ConfigurationLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.load_config()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None
        cls._config = {}
        cls._config_file = None

    def load_config(self, start: Optional[Path] = None) -> None:
        """Find and load pyproject.toml configuration."""
        current_path = (start or Path.cwd()).resolve()

        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.is_file():
                continue
            try:
                with open(config_file, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("Could not read %s: %s", config_file, exc)
                ConfigurationLoader._config = {}
                return
            section = data.get("tool", {}).get(CONFIG_SECTION, {})
            if not isinstance(section, dict):
                logger.warning("[tool.%s] in %s is not a table, ignoring it", CONFIG_SECTION, config_file)
                section = {}
            ConfigurationLoader._config = section
            ConfigurationLoader._config_file = config_file
            logger.debug("Loaded [tool.%s] from %s", CONFIG_SECTION, config_file)
            return

        ConfigurationLoader._config = {}

    @property
    def config(self) -> Mapping[str, Any]:
        return MappingProxyType(self._config)

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file
