"""Tests for CLI commands."""

import logging

import pytest
from click.testing import CliRunner

from paintgen.cli import _log_level, cli
from paintgen.config.hierarchy import _ENV_MAP


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for env_key in _ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def image_path(tmp_path, make_image):
    image = make_image(width=300, height=200, name="harbour.png")
    path = tmp_path / image.name
    path.write_bytes(image.data)
    return path


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "paintgen" in result.output
        for command in ("describe", "exhibition", "poster", "optimize", "config"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0


class TestDescribeCommand:
    def test_missing_images(self, runner):
        result = runner.invoke(cli, ["describe"])
        assert result.exit_code != 0

    def test_nonexistent_file(self, runner):
        result = runner.invoke(cli, ["describe", "nonexistent.png"])
        assert result.exit_code != 0

    def test_missing_api_key_fails_cleanly(self, runner, image_path):
        result = runner.invoke(cli, ["describe", str(image_path)])
        assert result.exit_code == 1


class TestPosterCommand:
    def test_help(self, runner):
        result = runner.invoke(cli, ["poster", "--help"])
        assert result.exit_code == 0
        assert "--title" in result.output

    def test_title_required(self, runner):
        result = runner.invoke(cli, ["poster"])
        assert result.exit_code != 0


class TestOptimizeCommand:
    def test_writes_jpeg(self, runner, image_path, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(cli, ["optimize", str(image_path), "-o", str(out_dir)])

        assert result.exit_code == 0, result.output
        written = out_dir / "harbour.jpg"
        assert written.exists()
        assert written.read_bytes()[:2] == b"\xff\xd8"

    def test_requires_output_dir(self, runner, image_path):
        result = runner.invoke(cli, ["optimize", str(image_path)])
        assert result.exit_code != 0


class TestConfigCommand:
    def test_shows_table(self, runner):
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "Configuration" in result.output
        assert "openai/gpt-4o" in result.output

    def test_masks_api_key(self, runner, monkeypatch):
        monkeypatch.setenv("AI_API_KEY", "sk-or-v1-secretsecretsecret")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "secretsecretsecret" not in result.output


class TestInvalidConfig:
    def test_bad_env_value_reports_error(self, runner, monkeypatch):
        monkeypatch.setenv("PAINTGEN_MAX_RETRIES", "-1")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "Traceback" not in result.output

    def test_bad_project_config_reports_error(self, runner, tmp_path, image_path):
        (tmp_path / "paintgen.yaml").write_text("min_quality: 90\nstart_quality: 50\n")
        result = runner.invoke(cli, ["optimize", str(image_path), "-o", str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "min_quality" in result.output
        assert not (tmp_path / "out").exists()


class TestLogLevel:
    def test_configured_level_is_base(self):
        assert _log_level(0, logging.ERROR) == logging.ERROR

    def test_verbose_lowers_to_info(self):
        assert _log_level(1, logging.WARNING) == logging.INFO

    def test_verbose_never_raises_level(self):
        assert _log_level(1, logging.DEBUG) == logging.DEBUG

    def test_double_verbose_is_debug(self):
        assert _log_level(2, logging.ERROR) == logging.DEBUG
