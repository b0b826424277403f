"""Throttled progress reporting."""

from __future__ import annotations

import logging

LOGGER = logging.getLogger(__name__)


class ProgressTracker:
    """Log progress each time a run crosses another 5% of its total.

    Instances are callable as ``tracker(current, total)`` with a zero-based
    ``current``, so they can be handed to the loader directly. Nothing is
    logged for the first item.
    """

    step = 5

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or LOGGER

    def __call__(self, current: int, total: int) -> None:
        if current <= 0 or total <= 0:
            return
        reached = self.percent(current, total) // self.step
        if reached > self.percent(current - 1, total) // self.step:
            self.logger.info("Progress: %d%%", reached * self.step)

    @staticmethod
    def percent(current: int, total: int) -> int:
        return 100 * current // total


__all__ = ["ProgressTracker"]
