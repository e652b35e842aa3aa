"""Application state: the ledger and goal plus everything derived from them."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.foods import FoodEntry, MealType
from calorie_tracker.domain.stats import DerivedStats
from calorie_tracker.services.advisor import AdvisoryContext
from calorie_tracker.services.goal import DailyGoal
from calorie_tracker.services.ledger import FoodLedger
from calorie_tracker.services.stats import (
    compute_stats,
    progress_message,
    round_half_up,
)
from calorie_tracker.services.store import Store

RECENT_ENTRIES_LIMIT = 5

_logger = logging.getLogger(__name__)


@dataclass
class TrackerService:
    """Owns the food ledger and daily goal for a single user."""

    ledger: FoodLedger
    goal: DailyGoal
    today: Callable[[], date]

    @classmethod
    def load(
        cls, store: Store, today: Callable[[], date], default_goal: int = 2000
    ) -> "TrackerService":
        """Load persisted state once at startup."""
        ledger = FoodLedger.load(store)
        goal = DailyGoal.load(store, default_goal)
        _logger.info(
            "Loaded %s food entries with daily goal %s",
            len(ledger.entries),
            goal.value,
        )
        return cls(ledger=ledger, goal=goal, today=today)

    def log_food(  # noqa: PLR0913
        self,
        *,
        name: str,
        calories: float | str | None,
        quantity: float | str | None,
        meal: MealType | str = MealType.BREAKFAST,
        day: date | None = None,
    ) -> FoodEntry:
        """Validate a manual entry and append it to the ledger."""
        cleaned_name = (name or "").strip()
        if not cleaned_name:
            raise ValueError("Food name is required")
        calories_value = _parse_number(calories, "Calories")
        if calories_value < 0:
            raise ValueError("Calories cannot be negative")
        quantity_value = _parse_number(quantity, "Quantity")
        if quantity_value <= 0:
            raise ValueError("Quantity must be greater than zero")
        try:
            meal_type = MealType(meal)
        except ValueError as exc:
            raise ValueError(f"Unknown meal type: {meal}") from exc
        entry = FoodEntry(
            id=None,
            name=cleaned_name,
            calories=calories_value,
            quantity=quantity_value,
            meal=meal_type,
            date=day or self.today(),
        )
        return self.ledger.add(entry)

    def add_entries(self, entries: list[FoodEntry]) -> list[FoodEntry]:
        """Append already-built entries, such as confirmed photo detections."""
        return self.ledger.add_many(entries)

    def delete_food(self, entry_id: int) -> None:
        """Remove an entry by id."""
        self.ledger.remove(entry_id)

    def update_goal(self, value: int | str) -> int:
        """Replace the daily goal; non-positive values are rejected."""
        goal_value = int(_parse_number(value, "Daily goal"))
        self.goal.update(goal_value)
        return goal_value

    def stats(self) -> DerivedStats:
        """Derived statistics for the current day."""
        return compute_stats(self.ledger.entries, self.goal.value, self.today())

    def progress_message(self) -> str:
        """Dashboard line describing today's progress."""
        return progress_message(self.stats(), self.goal.value)

    def history(self) -> list[FoodEntry]:
        """All entries, newest first."""
        return self.ledger.history()

    def entries_for(self, day: date) -> list[FoodEntry]:
        """Entries logged for a day."""
        return self.ledger.list_for_date(day)

    def advisory_context(self) -> AdvisoryContext:
        """Snapshot of current progress for the nutrition assistant."""
        stats = self.stats()
        return AdvisoryContext(
            goal=self.goal.value,
            today_total=round_half_up(stats.today_total),
            remaining=round_half_up(stats.remaining),
            weekly_average=round_half_up(stats.weekly_average),
            recent_entries=list(self.ledger.entries[-RECENT_ENTRIES_LIMIT:]),
        )


def _parse_number(value: float | str | None, label: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{label} is required")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be a number") from exc
    if not math.isfinite(number):
        raise ValueError(f"{label} must be a number")
    return number
