"""
Observability adapters for failure records.

LoggingObserver is the production sink. RecordingObserver keeps records in
memory so tests can assert on what was reported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailureRecord:
    message: str
    error: str
    context: dict[str, Any]


class LoggingObserver:
    """Writes one ERROR record per failure; never raises."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record_failure(self, message: str, error: str, context: Mapping[str, Any]) -> None:
        try:
            self._log.error(
                "%s: %s | context=%s",
                message,
                error,
                dict(context),
                extra={"failure_context": dict(context)},
            )
        except Exception:  # noqa: BLE001
            pass


@dataclass
class RecordingObserver:
    """Collects failure records in memory."""

    records: list[FailureRecord] = field(default_factory=list)

    def record_failure(self, message: str, error: str, context: Mapping[str, Any]) -> None:
        self.records.append(FailureRecord(message=message, error=error, context=dict(context)))
