"""Tests for the CLI interface."""

import json
import logging

import httpx
import pytest
import respx
from click.testing import CliRunner

from instapaper_client.cli import main
from instapaper_client.config import (
    AppConfig,
    ConsumerConfig,
    TokenConfig,
    load_config,
    save_config,
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.toml"


@pytest.fixture
def configured(config_path, api_url):
    """Create a config file with a saved token."""
    config = AppConfig(
        consumer=ConsumerConfig(key="ckey", secret="csecret"),
        token=TokenConfig(oauth_token="tok", oauth_token_secret="toksecret"),
        base_url=api_url,
    )
    save_config(config, config_path)
    return config_path


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Instapaper" in result.output

    @respx.mock
    def test_login_saves_token(self, runner, config_path, api_url, url_for):
        respx.post(url_for("oauth/access_token")).mock(
            return_value=httpx.Response(
                200, text="oauth_token=tok&oauth_token_secret=toksecret"
            )
        )

        result = runner.invoke(
            main,
            ["--config", str(config_path), "login", "--base-url", api_url],
            input="ckey\ncsecret\nme@example.com\nhunter2\n",
        )

        assert result.exit_code == 0, result.output
        assert "Credentials saved" in result.output

        config = load_config(config_path)
        assert config.consumer.key == "ckey"
        assert config.token == TokenConfig("tok", "toksecret")
        assert config.base_url == api_url
        assert "hunter2" not in config_path.read_text()

    @respx.mock
    def test_login_rejected(self, runner, config_path, api_url, url_for):
        respx.post(url_for("oauth/access_token")).mock(
            return_value=httpx.Response(401, text="Invalid xAuth credentials.")
        )

        result = runner.invoke(
            main,
            ["--config", str(config_path), "login", "--base-url", api_url],
            input="ckey\ncsecret\nme@example.com\nwrong\n",
        )

        assert result.exit_code == 1
        assert "status 401" in result.output
        assert not config_path.exists()

    def test_verify_without_config(self, runner, config_path):
        result = runner.invoke(main, ["--config", str(config_path), "verify"])
        assert result.exit_code != 0
        assert "No config found" in result.output

    def test_verify_not_logged_in(self, runner, config_path):
        save_config(AppConfig(consumer=ConsumerConfig("ckey", "csecret")), config_path)

        result = runner.invoke(main, ["--config", str(config_path), "verify"])
        assert result.exit_code != 0
        assert "Not logged in" in result.output

    @respx.mock
    def test_verify(self, runner, configured, url_for, sample_user):
        respx.post(url_for("account/verify_credentials")).mock(
            return_value=httpx.Response(200, json=[sample_user.to_dict()])
        )

        result = runner.invoke(main, ["--config", str(configured), "verify"])

        assert result.exit_code == 0, result.output
        assert "Authenticated as reader@example.com (user_id 42)" in result.output

    @respx.mock
    def test_add(self, runner, configured, url_for, sample_bookmarks):
        route = respx.post(url_for("bookmarks/add")).mock(
            return_value=httpx.Response(201, json=[sample_bookmarks[0].to_dict()])
        )

        result = runner.invoke(
            main,
            [
                "--config",
                str(configured),
                "add",
                "https://sirupsen.com/read",
                "--title",
                "How I Read",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Added bookmark 1001: How I Read" in result.output
        form = httpx.QueryParams(route.calls.last.request.content.decode())
        assert form["title"] == "How I Read"
        assert "description" not in form

    @respx.mock
    def test_add_server_error(self, runner, configured, url_for):
        respx.post(url_for("bookmarks/add")).mock(
            return_value=httpx.Response(500, text="")
        )

        result = runner.invoke(
            main, ["--config", str(configured), "add", "https://example.com"]
        )

        assert result.exit_code == 1
        assert "Error: Request failed with status 500" in result.output

    @respx.mock
    def test_archive(self, runner, configured, url_for, sample_bookmarks):
        respx.post(url_for("bookmarks/archive")).mock(
            return_value=httpx.Response(200, json=[sample_bookmarks[1].to_dict()])
        )

        result = runner.invoke(main, ["--config", str(configured), "archive", "1002"])

        assert result.exit_code == 0, result.output
        assert "Archived bookmark 1002: Another Article" in result.output

    def test_archive_requires_integer(self, runner, configured):
        result = runner.invoke(main, ["--config", str(configured), "archive", "abc"])
        assert result.exit_code == 2

    @respx.mock
    def test_list(self, runner, configured, url_for, sample_list):
        route = respx.post(url_for("bookmarks/list")).mock(
            return_value=httpx.Response(200, json=sample_list.to_dict())
        )

        result = runner.invoke(main, ["--config", str(configured), "list"])

        assert result.exit_code == 0, result.output
        assert "unread: 2 bookmarks, 2 highlights" in result.output
        assert "1001\tHow I Read\thttps://sirupsen.com/read [2 highlights]" in result.output
        assert "1002\tAnother Article" in result.output
        form = httpx.QueryParams(route.calls.last.request.content.decode())
        assert form["folder_id"] == "unread"

    @respx.mock
    def test_list_json(self, runner, configured, url_for, sample_list):
        route = respx.post(url_for("bookmarks/list")).mock(
            return_value=httpx.Response(200, json=sample_list.to_dict())
        )

        result = runner.invoke(
            main, ["--config", str(configured), "list", "--folder", "archive", "--json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == sample_list.to_dict()
        form = httpx.QueryParams(route.calls.last.request.content.decode())
        assert form["folder_id"] == "archive"

    def test_status_without_config(self, runner, config_path):
        result = runner.invoke(main, ["--config", str(config_path), "status"])
        assert result.exit_code == 0
        assert "Not configured" in result.output

    def test_status_with_config(self, runner, configured, api_url):
        result = runner.invoke(main, ["--config", str(configured), "status"])
        assert result.exit_code == 0
        assert "Found" in result.output
        assert f"API: {api_url}" in result.output
        assert "Logged in: yes" in result.output
        assert "toksecret" not in result.output

    def test_repeated_runs_keep_one_log_handler(self, runner, configured):
        for _ in range(3):
            result = runner.invoke(main, ["--config", str(configured), "status"])
            assert result.exit_code == 0

        assert len(logging.getLogger("instapaper_client").handlers) == 1

    def test_verbose_lowers_level(self, runner, configured):
        runner.invoke(main, ["--config", str(configured), "-v", "status"])
        assert logging.getLogger("instapaper_client").level == logging.DEBUG

        runner.invoke(main, ["--config", str(configured), "status"])
        assert logging.getLogger("instapaper_client").level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING
