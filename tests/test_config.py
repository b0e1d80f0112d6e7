import pytest

from multibar_cli.exceptions import ConfigurationError
from multibar_cli.models.config import DisplayConfig, DownloadConfig
from multibar_cli.storage.config_manager import ConfigManager


def test_display_defaults():
    config = DisplayConfig()
    assert config.name_column_width == 35
    assert config.tick_interval == 0.1
    assert config.log_queue_capacity == 100
    assert config.min_bar_width == 10
    assert config.fallback_width == 80


def test_invalid_display_values_rejected():
    with pytest.raises(ValueError):
        DisplayConfig(tick_interval=0)
    with pytest.raises(ValueError):
        DisplayConfig(log_queue_capacity=0)
    with pytest.raises(ValueError):
        DisplayConfig(name_column_width=2)


def test_missing_file_uses_defaults(tmp_path):
    config = ConfigManager(tmp_path / "missing.ini").load_config()
    assert config == DownloadConfig()


def test_values_are_read_from_ini(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[download]\nmax_workers = 6\noutput_dir = music\n\n"
        "[display]\ntick_interval = 0.25\nname_column_width = 20\n",
        encoding="utf-8",
    )
    config = ConfigManager(path).load_config()

    assert config.max_workers == 6
    assert config.output_dir == "music"
    assert config.display.tick_interval == 0.25
    assert config.display.name_column_width == 20
    assert config.display.min_bar_width == 10


def test_cli_options_override_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[download]\nmax_workers = 6\n\n[display]\nmin_bar_width = 12\n",
        encoding="utf-8",
    )
    config = ConfigManager(path).load_config(
        {
            "max_workers": 2,
            "source_urls": ["http://x/a"],
            "display": {"min_bar_width": 20},
        }
    )

    assert config.max_workers == 2
    assert config.source_urls == ["http://x/a"]
    assert config.display.min_bar_width == 20


def test_invalid_value_raises_configuration_error(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[download]\nmax_workers = 99\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="validation failed"):
        ConfigManager(path).load_config()


def test_non_numeric_value_raises_configuration_error(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[display]\ntick_interval = fast\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigManager(path).load_config()


def test_malformed_file_raises_configuration_error(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("max_workers = 3\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="parsing"):
        ConfigManager(path).load_config()


def test_saved_defaults_load_back(tmp_path):
    path = tmp_path / "nested" / "config.ini"
    manager = ConfigManager(path)
    manager.save_default_config()

    text = path.read_text(encoding="utf-8")
    assert "[display]" in text and "tick_interval = 0.1" in text
    assert ConfigManager(path).load_config() == DownloadConfig()


def test_download_section_holds_only_user_settings():
    assert DownloadConfig.get_ini_keys() == {
        "output_dir",
        "max_workers",
        "max_attempts",
    }
    assert "config_path" not in DownloadConfig.model_fields
