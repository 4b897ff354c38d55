"""Tests for the structured-reasoning CLI."""

from typer.testing import CliRunner

from structured_reasoning import __version__
from structured_reasoning.cli.main import app

runner = CliRunner()


class TestCLI:
    """Tests for the Typer application."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"structured-reasoning version {__version__}" in result.output

    def test_invalid_transport(self):
        result = runner.invoke(app, ["run", "--transport", "carrier-pigeon"])

        assert result.exit_code == 1

    def test_config_table(self):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "structured-reasoning configuration" in result.output

    def test_config_json_from_file(self, tmp_path):
        env_file = tmp_path / "reasoning.env"
        env_file.write_text("STRUCTURED_REASONING_MAX_SESSIONS=12\n")

        try:
            result = runner.invoke(app, ["--config", str(env_file), "config", "--json"])
        finally:
            from structured_reasoning.config import configure_settings

            configure_settings(_env_file=None)

        assert result.exit_code == 0
        assert '"max_sessions": 12' in result.output

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "absent.env"), "config"])

        assert result.exit_code != 0
