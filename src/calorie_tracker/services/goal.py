"""Daily calorie goal setting."""

import logging
from dataclasses import dataclass

from calorie_tracker.services.store import GOAL_KEY, Store

_logger = logging.getLogger(__name__)


@dataclass
class DailyGoal:
    """Persisted calories-per-day target."""

    store: Store
    value: int

    @classmethod
    def load(cls, store: Store, default: int) -> "DailyGoal":
        """Load the goal, falling back to the default when absent or invalid."""
        return cls(store=store, value=_parse_goal(store.load(GOAL_KEY), default))

    def update(self, value: int) -> None:
        """Replace the goal and persist it."""
        if value <= 0:
            raise ValueError("Daily goal must be a positive number of calories")
        self.value = value
        self.store.save(GOAL_KEY, str(value))


def _parse_goal(raw: object | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        _logger.warning("Ignoring unparsable stored goal %r", raw)
        return default
    if value <= 0:
        _logger.warning("Ignoring non-positive stored goal %s", value)
        return default
    return value
