"""Observability: structured logs (event name + extra fields), in-process counters."""

from __future__ import annotations

import logging
from typing import Any

from .models.outcome import CampaignOutcome

_LOGGER = logging.getLogger("exclusion_sync")
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord has; anything else came in via ``extra``.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

# Counters stub: outcomes[status] = count, errors[kind] = count
METRICS: dict[str, dict[str, int]] = {"outcomes": {}, "errors": {}}


class StructuredFormatter(logging.Formatter):
    """Append ``extra`` fields to the message as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if not fields:
            return base
        return base + " " + " ".join(f"{k}={v!r}" for k, v in sorted(fields.items()))


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger."""
    if not any(isinstance(h.formatter, StructuredFormatter) for h in _LOGGER.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        _LOGGER.addHandler(handler)
    # Root handlers would otherwise print each event a second time.
    _LOGGER.propagate = False
    _LOGGER.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger() -> logging.Logger:
    return _LOGGER


def record_outcome(outcome: CampaignOutcome) -> None:
    """Emit the per-campaign log line and bump counters."""
    status = outcome.status.value
    payload: dict[str, Any] = {
        "campaign_id": outcome.campaign_id,
        "report_sites": outcome.report_sites,
        "blocked": len(outcome.blocked),
        "added": len(outcome.added),
        "final_size": outcome.final_size,
    }
    if outcome.dropped:
        payload["dropped"] = len(outcome.dropped)
    if outcome.error is not None:
        payload["error_kind"] = outcome.error.kind
        payload["error"] = outcome.error.message
        _LOGGER.error("campaign_failed", extra=payload)
        METRICS["errors"][outcome.error.kind] = METRICS["errors"].get(outcome.error.kind, 0) + 1
    else:
        _LOGGER.info(f"campaign_{status}", extra=payload)
    METRICS["outcomes"][status] = METRICS["outcomes"].get(status, 0) + 1


def metrics_snapshot() -> dict[str, dict[str, int]]:
    """Return current counters (for the CLI summary or health output)."""
    return {k: dict(v) for k, v in METRICS.items()}


def reset_metrics() -> None:
    for bucket in METRICS.values():
        bucket.clear()
