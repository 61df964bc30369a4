"""
Unit tests for the operator CLI.
"""
import json
import os
from unittest.mock import AsyncMock

import pytest

from outbound import cli
from outbound.clients import emailbison, hq_data
from outbound.clients.hq_data import HQDataError
from outbound.errors import NotFoundError

pytestmark = pytest.mark.usefixtures("restore_root_logger")


class TestCommands:
    def test_account_prints_json(self, monkeypatch, capsys):
        monkeypatch.setattr(cli.services, "get_account", AsyncMock(return_value={"id": 1, "name": "Ops"}))

        exit_code = cli.main(["account"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {"id": 1, "name": "Ops"}

    def test_campaigns_passes_filters(self, monkeypatch, capsys):
        list_campaigns = AsyncMock(return_value=[])
        monkeypatch.setattr(cli.services, "list_campaigns", list_campaigns)

        assert cli.main(["campaigns", "--status", "active", "--search", "Q1"]) == 0

        filters = list_campaigns.await_args.args[0]
        assert filters.to_params() == {"search": "Q1", "status": "active"}

    def test_replies_passes_filters(self, monkeypatch):
        list_replies = AsyncMock(return_value={"data": []})
        monkeypatch.setattr(cli.services, "list_replies", list_replies)

        assert cli.main(["replies", "--status", "unread", "--campaign-id", "42", "--per-page", "25"]) == 0

        filters = list_replies.await_args.args[0]
        assert filters.to_params() == {"status": "unread", "campaign_id": 42, "per_page": 25}

    def test_companies_and_people(self, monkeypatch):
        search_companies = AsyncMock(return_value={"data": []})
        search_people = AsyncMock(return_value={"data": []})
        monkeypatch.setattr(cli.services, "search_companies", search_companies)
        monkeypatch.setattr(cli.services, "search_people", search_people)

        assert cli.main(["companies", "--industry", "SaaS", "--limit", "10"]) == 0
        assert cli.main(["people", "--job-title", "CTO"]) == 0

        assert search_companies.await_args.args[0].to_params() == {"limit": 10, "offset": 0, "industry": "SaaS"}
        assert search_people.await_args.args[0].to_params() == {"limit": 50, "offset": 0, "job_title": "CTO"}

    def test_invalid_status_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["campaigns", "--status", "bogus"])
        assert exc_info.value.code == 2


class TestFailures:
    def test_api_error_exit_code(self, monkeypatch, capsys):
        monkeypatch.setattr(
            cli.services,
            "list_campaigns",
            AsyncMock(side_effect=NotFoundError(message="Campaign not found")),
        )

        exit_code = cli.main(["campaigns"])

        assert exit_code == cli.EXIT_API_ERROR
        payload = json.loads(capsys.readouterr().err)
        assert payload["name"] == "NotFoundError"
        assert payload["code"] == "NOT_FOUND_ERROR"
        assert payload["message"] == "Campaign not found"

    def test_hq_error_exit_code(self, monkeypatch, capsys):
        monkeypatch.setattr(cli.services, "search_people", AsyncMock(side_effect=HQDataError("HTTP 503", 503)))

        assert cli.main(["people"]) == cli.EXIT_API_ERROR
        assert json.loads(capsys.readouterr().err)["status_code"] == 503

    def test_missing_api_key_is_config_error(self, capsys):
        exit_code = cli.main(["account"])

        assert exit_code == cli.EXIT_CONFIG_ERROR
        assert "EMAILBISON_API_KEY" in capsys.readouterr().err


class TestVerbose:
    def test_verbose_enables_emailbison_debug(self, monkeypatch):
        monkeypatch.setenv("EMAILBISON_API_KEY", "k")
        monkeypatch.setattr(cli.services, "list_workspaces", AsyncMock(return_value=[]))

        assert cli.main(["--verbose", "workspaces"]) == 0

        assert emailbison.get_client().debug is True
        assert "EMAILBISON_DEBUG" not in os.environ
        assert "HQ_DATA_DEBUG" not in os.environ

    def test_verbose_does_not_outlive_client_reset(self, monkeypatch):
        monkeypatch.setenv("EMAILBISON_API_KEY", "k")
        monkeypatch.setattr(cli.services, "get_account", AsyncMock(return_value={}))

        assert cli.main(["--verbose", "account"]) == 0
        emailbison.reset_client()

        assert emailbison.get_client().debug is False

    def test_verbose_hq_command_needs_no_api_key(self, monkeypatch):
        monkeypatch.setattr(cli.services, "search_people", AsyncMock(return_value={"data": []}))

        assert cli.main(["--verbose", "people"]) == 0

        assert hq_data.get_hq_client().debug is True
        assert emailbison._default_client is None

    def test_verbose_without_api_key_is_config_error(self, capsys):
        assert cli.main(["--verbose", "account"]) == cli.EXIT_CONFIG_ERROR
        assert "EMAILBISON_API_KEY" in capsys.readouterr().err
