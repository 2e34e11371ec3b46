"""Tests for cloudhooks CLI commands."""

import json

import pytest
from click.testing import CliRunner

from cloudhooks.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestRoutes:
    def test_lists_every_route(self, runner):
        result = runner.invoke(cli, ["routes", "--app", "webhook_app:router"])
        assert result.exit_code == 0
        assert "POST /beforeSave_Post" in result.output
        assert "POST /afterDelete_Post" in result.output
        assert "POST /function_hello" in result.output
        assert "3 route(s)" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["routes", "--app", "webhook_app:router", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "beforeSave": ["Post"],
            "afterSave": [],
            "beforeDelete": [],
            "afterDelete": ["Post"],
            "function": ["hello"],
        }

    def test_factory(self, runner):
        result = runner.invoke(cli, ["routes", "--app", "webhook_app:create_router"])
        assert result.exit_code == 0
        assert "POST /function_hello" in result.output

    def test_empty_router(self, runner):
        result = runner.invoke(cli, ["routes", "--app", "webhook_app:empty_router"])
        assert result.exit_code == 0
        assert "No webhook routes registered." in result.output

    @pytest.mark.parametrize("target,message", [
        ("webhook_app", "module:attribute"),
        ("no_such_module_xyz:router", "Could not import"),
        ("webhook_app:missing", "has no attribute"),
        ("webhook_app:not_a_router", "is not a WebhookRouter"),
    ])
    def test_bad_app_reference(self, runner, target, message):
        result = runner.invoke(cli, ["routes", "--app", target])
        assert result.exit_code == 2
        assert message in result.output


class TestServe:
    def test_runs_uvicorn_with_config_defaults(self, runner, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "cloudhooks.cli.serve_cmd.uvicorn.run",
            lambda app, **kwargs: calls.append((app, kwargs)),
        )

        result = runner.invoke(cli, ["serve", "--app", "webhook_app:router"])
        assert result.exit_code == 0, result.output

        from webhook_app import router

        assert calls == [
            (router.app, {"host": "127.0.0.1", "port": 8123, "log_level": "info"})
        ]
        assert "Serving 3 webhook route(s) on http://127.0.0.1:8123" in result.output

    def test_options_override_config(self, runner, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "cloudhooks.cli.serve_cmd.uvicorn.run",
            lambda app, **kwargs: calls.append(kwargs),
        )

        result = runner.invoke(cli, [
            "serve", "--app", "webhook_app:router",
            "--host", "0.0.0.0", "--port", "9001", "--log-level", "debug",
        ])
        assert result.exit_code == 0, result.output
        assert calls == [{"host": "0.0.0.0", "port": 9001, "log_level": "debug"}]
