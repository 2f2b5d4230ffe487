"""CLI and serverless entry point tests (no network)."""

from __future__ import annotations

import pytest

from exclusion_sync import cli, main
from exclusion_sync.errors import UpstreamFetchError
from exclusion_sync.models.outcome import CampaignOutcome, OutcomeStatus, RunSummary


class StubService:
    def __init__(self, summary: RunSummary | None = None, error: Exception | None = None):
        self.summary = summary or RunSummary()
        self.error = error
        self.calls: list[tuple] = []

    def run(self, campaign_ids=None, *, dry_run=False):
        self.calls.append((campaign_ids, dry_run))
        if self.error is not None:
            raise self.error
        return self.summary


@pytest.fixture
def env(monkeypatch):
    monkeypatch.chdir("/")
    for name in ("CAMPAIGN_IDS", "CAMPAIGN_ID", "DRY_RUN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("YANDEX_TOKEN", "y-token")
    monkeypatch.setenv("SHEET_ID", "sheet-1")
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    return monkeypatch


def test_classify_command_prints_reasons(capsys):
    code = cli.main(
        ["classify", "casino-spam.ru", "goodcasino.com", "news.ru", "--blacklist", "casino", "--whitelist", "goodcasino.com"]
    )
    out = capsys.readouterr().out.splitlines()
    assert code == cli.EXIT_OK
    assert out == [
        "casino-spam.ru\tblocked: casino",
        "goodcasino.com\twhitelisted",
        "news.ru\tallowed",
    ]


def test_missing_config_exits_with_config_code(monkeypatch, capsys):
    monkeypatch.chdir("/")
    for name in ("YANDEX_TOKEN", "SHEET_ID", "GOOGLE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    code = cli.main(["check-config"])
    assert code == cli.EXIT_CONFIG
    assert "YANDEX_TOKEN" in capsys.readouterr().err


def test_run_command_passes_options(env, monkeypatch, capsys):
    summary = RunSummary(outcomes=[CampaignOutcome(campaign_id=5, status=OutcomeStatus.updated, blocked=["a.ru"])])
    stub = StubService(summary)
    monkeypatch.setattr(cli, "build_reconciliation_service", lambda settings: stub)

    code = cli.main(["run", "--dry-run", "--campaign-id", "5"])

    assert code == cli.EXIT_OK
    assert stub.calls == [([5], True)]
    assert summary.message in capsys.readouterr().out


def test_run_command_reports_failures(env, monkeypatch):
    summary = RunSummary(outcomes=[CampaignOutcome(campaign_id=5, status=OutcomeStatus.failed)])
    monkeypatch.setattr(cli, "build_reconciliation_service", lambda settings: StubService(summary))
    assert cli.main(["run"]) == cli.EXIT_FAILED


def test_run_command_aborted_run(env, monkeypatch, capsys):
    stub = StubService(error=UpstreamFetchError("sheets: batchGet failed with HTTP 403"))
    monkeypatch.setattr(cli, "build_reconciliation_service", lambda settings: stub)
    assert cli.main(["run"]) == cli.EXIT_FAILED
    assert "run aborted" in capsys.readouterr().err


def test_handler_returns_summary_message(env, monkeypatch):
    env.setenv("CAMPAIGN_ID", "77")
    stub = StubService(RunSummary())
    monkeypatch.setattr(main, "build_reconciliation_service", lambda settings: stub)
    assert main.handler() == RunSummary().message
    assert stub.calls == [([77], False)]


def test_handler_reraises_fatal_errors(env, monkeypatch):
    stub = StubService(error=UpstreamFetchError("sheets down"))
    monkeypatch.setattr(main, "build_reconciliation_service", lambda settings: stub)
    with pytest.raises(UpstreamFetchError):
        main.handler()
