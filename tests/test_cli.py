import pytest
import typer
from typer.testing import CliRunner

import multibar_cli.__main__ as entry
from multibar_cli import __version__
from multibar_cli.cli.app import app
from multibar_cli.exceptions import ConfigurationError

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_writes_config(tmp_path):
    path = tmp_path / "config.ini"
    result = runner.invoke(app, ["--config", str(path), "init"])
    assert result.exit_code == 0
    assert path.is_file()
    assert "[display]" in path.read_text(encoding="utf-8")


def test_init_refuses_to_overwrite_without_confirmation(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[download]\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(path), "init"], input="n\n")
    assert result.exit_code != 0
    assert path.read_text(encoding="utf-8") == "[download]\n"


def test_show_config(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[download]\nmax_workers = 7\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(path), "--show-config"])
    assert result.exit_code == 0
    assert "Max Workers" in result.output
    assert "7" in result.output


def test_demo_renders_every_file(tmp_path):
    result = runner.invoke(
        app,
        [
            "--config",
            str(tmp_path / "none.ini"),
            "demo",
            "--count",
            "3",
            "--size",
            "2000",
            "--delay",
            "0",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "01. Intro.flac" in result.output
    assert "100%" in result.output
    assert "Download Complete!" in result.output


def test_invalid_config_surfaces_configuration_error(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[download]\nmax_workers = 0\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(path), "demo", "--count", "1"])
    assert result.exit_code != 0
    assert type(result.exception).__name__ == "ConfigurationError"


def _raise(exc):
    def fake_app():
        raise exc

    return fake_app


@pytest.mark.parametrize(
    "exc, code",
    [
        (ConfigurationError("bad value"), 1),
        (RuntimeError("boom"), 1),
        (KeyboardInterrupt(), 0),
    ],
)
def test_main_maps_errors_to_exit_codes(monkeypatch, exc, code):
    monkeypatch.setattr(entry, "app", _raise(exc))
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == code


def test_main_returns_quietly_after_abort(monkeypatch):
    monkeypatch.setattr(entry, "app", _raise(typer.Abort()))
    entry.main()
