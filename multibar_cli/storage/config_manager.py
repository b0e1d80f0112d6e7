"""
Manages loading and creation of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from multibar_cli.exceptions import ConfigurationError
from multibar_cli.models.config import DisplayConfig, DownloadConfig

log = logging.getLogger(__name__)

DOWNLOAD_SECTION = "download"
DISPLAY_SECTION = "display"


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_config(self, cli_options: dict[str, Any] | None = None) -> DownloadConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing config file is not an error: the defaults are used instead.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Display knobs may be given under a nested "display" dictionary.

        Returns:
            A validated DownloadConfig object.

        Raises:
            ConfigurationError: If the config file is unreadable or validation fails.
        """
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
        else:
            log.debug(
                f"No configuration file at '{self.config_file_path}', using defaults."
            )

        try:
            config_from_file = self._get_config_as_dict()
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

        if cli_options:
            cli_options = dict(cli_options)
            display_overrides = cli_options.pop("display", None) or {}
            config_from_file["display"].update(display_overrides)
            config_from_file.update(cli_options)

        try:
            return DownloadConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_default_config(self) -> None:
        """
        Writes a configuration file holding every key with its default value.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        config = configparser.ConfigParser()
        download_defaults = DownloadConfig()
        config[DOWNLOAD_SECTION] = {
            key: str(getattr(download_defaults, key))
            for key in sorted(DownloadConfig.get_ini_keys())
        }
        config[DISPLAY_SECTION] = {
            key: str(getattr(download_defaults.display, key))
            for key in sorted(DisplayConfig.get_ini_keys())
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the [download] and [display] sections into a dictionary."""
        config: dict[str, Any] = {}
        if self._parser.has_section(DOWNLOAD_SECTION):
            section = self._parser[DOWNLOAD_SECTION]
            config["output_dir"] = section.get("output_dir", ".")
            config["max_workers"] = section.getint("max_workers", 4)
            config["max_attempts"] = section.getint("max_attempts", 3)

        display: dict[str, Any] = {}
        if self._parser.has_section(DISPLAY_SECTION):
            section = self._parser[DISPLAY_SECTION]
            for key in DisplayConfig.get_ini_keys():
                if key not in section:
                    continue
                if key == "tick_interval":
                    display[key] = section.getfloat(key)
                else:
                    display[key] = section.getint(key)
        config["display"] = display

        return config
