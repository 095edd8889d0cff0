"""
Decision Logger - Logging infrastructure for assignment runs.

Tracks placement decisions, data warnings, and stage progress so a reviewer
can see why each room was formed.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

logger = logging.getLogger(__name__)


class DecisionLogger:
    """Logger for tracking placement decisions and data warnings during a run."""

    def __init__(self, debug_mode: bool = False) -> None:
        self.debug_mode = debug_mode
        self.decisions: dict[str, list[str]] = defaultdict(list)
        self.data_warnings: list[str] = []
        self.progress: list[str] = []

    def log_decision(self, decision_type: str, details: str) -> None:
        """Log a placement decision (preserve, mutual_magnet, best_fit, ...)."""
        self.decisions[decision_type].append(details)
        if self.debug_mode:
            logger.debug(f"[DECISION] {decision_type}: {details}")

    def log_data_warning(self, warning: str) -> None:
        """Log input data problems (missing gender, ghost references)."""
        self.data_warnings.append(warning)
        logger.warning(f"[DATA] {warning}")

    def log_progress(self, message: str) -> None:
        self.progress.append(message)
        logger.info(message)

    def decision_counts(self) -> dict[str, int]:
        return {decision_type: len(entries) for decision_type, entries in self.decisions.items()}

    def get_summary(self) -> dict[str, Any]:
        """Get summary of all logged information."""
        return {
            "decisions": dict(self.decisions),
            "decision_counts": self.decision_counts(),
            "data_warnings": list(self.data_warnings),
            "progress": list(self.progress),
        }
