"""Unit tests for the force-feedback CLI."""

import json
import logging

import pytest
from click.testing import CliRunner

from force_feedback.cli import cli, describe_friction
from force_feedback.config.loader import CONFIG_ENV_VAR, ConfigLoader
from force_feedback.config.models import FeedbackConfig, get_default_config
from force_feedback.feedback_logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(ConfigLoader, "GLOBAL_CONFIG_DIR", tmp_path / "global")
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.propagate = True


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def project(tmp_path):
    path = tmp_path / "project"
    path.mkdir()
    return path


class TestTiersCommand:
    """Tests for `force-feedback tiers`."""

    def test_lists_default_tiers(self, runner, project):
        result = runner.invoke(cli, ["tiers", "--project", str(project)])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 3
        assert "highlight only" in lines[0]
        assert "'⌫' every 3" in lines[1]
        assert "per keystroke" in lines[2]

    def test_json_output(self, runner, project):
        result = runner.invoke(cli, ["tiers", "--project", str(project), "--json"])

        assert result.exit_code == 0
        parsed = FeedbackConfig.model_validate(json.loads(result.output))
        assert parsed == get_default_config()

    def test_explicit_config(self, runner, project, tmp_path):
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"tiers": []}))

        result = runner.invoke(
            cli, ["tiers", "--project", str(project), "--config", str(config_file)]
        )

        assert result.exit_code == 0
        assert "No tiers configured" in result.output

    def test_log_file_receives_config_resolution(self, runner, project, tmp_path):
        log_file = tmp_path / "logs" / "feedback.jsonl"

        result = runner.invoke(
            cli,
            [
                "tiers",
                "--project",
                str(project),
                "--log-file",
                str(log_file),
                "--log-format",
                "json",
            ],
        )

        assert result.exit_code == 0
        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert entries[-1]["category"] == "config"
        assert entries[-1]["message"] == "No force-feedback config found, using defaults"

    def test_unknown_log_format_rejected(self, runner, project):
        result = runner.invoke(
            cli, ["tiers", "--project", str(project), "--log-format", "xml"]
        )
        assert result.exit_code == 2

    def test_invalid_config_exits_with_error(self, runner, project, tmp_path):
        config_file = tmp_path / "broken.json"
        config_file.write_text("{")

        result = runner.invoke(
            cli, ["tiers", "--project", str(project), "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "Could not read configuration file" in result.output


class TestInitCommand:
    """Tests for `force-feedback init`."""

    def test_writes_default_config(self, runner, project):
        result = runner.invoke(cli, ["init", "--project", str(project)])

        assert result.exit_code == 0
        target = project / ".force-feedback" / "config.json"
        assert f"Wrote {target}" in result.output
        assert ConfigLoader(project).load_file(target) == get_default_config()

    def test_refuses_to_overwrite(self, runner, project):
        runner.invoke(cli, ["init", "--project", str(project)])

        result = runner.invoke(cli, ["init", "--project", str(project)])

        assert result.exit_code == 1
        assert "--force" in result.output

    def test_force_overwrites(self, runner, project):
        target = project / ".force-feedback" / "config.json"
        target.parent.mkdir()
        target.write_text("{}")

        result = runner.invoke(cli, ["init", "--project", str(project), "--force"])

        assert result.exit_code == 0
        assert json.loads(target.read_text())["tiers"]


def test_describe_friction_without_tiers():
    assert describe_friction(FeedbackConfig()) == []
