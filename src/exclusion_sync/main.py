"""Serverless entry point: one reconciliation pass per invocation."""

from __future__ import annotations

from typing import Any

from .config.runtime import load_settings
from .errors import ExclusionSyncError
from .observability import configure_logging, get_logger
from .wiring import build_reconciliation_service


def handler(event: Any = None, context: Any = None) -> str:
    """Run with settings from the environment and return the summary message.

    Configuration and run-level fetch errors are logged and re-raised so the
    platform marks the invocation as failed; per-campaign errors are not.
    """
    logger = get_logger()
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        summary = build_reconciliation_service(settings).run(
            settings.campaign_id_list or None,
            dry_run=settings.dry_run,
        )
    except ExclusionSyncError as e:
        logger.critical("run_aborted", extra={"error_kind": e.kind, "error": e.message})
        raise
    return summary.message


def main():
    """Run once from the command line, printing the summary message."""
    print(handler())


if __name__ == "__main__":
    main()
