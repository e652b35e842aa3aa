"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.foods import MealType


@dataclass(frozen=True)
class WeeklyPoint:
    """Calories consumed on one day of the trailing week."""

    day: date
    label: str
    total: float
    goal: int


@dataclass(frozen=True)
class MealBreakdown:
    """Calories and entry count for one meal type."""

    meal: MealType
    calories: float
    count: int


@dataclass(frozen=True)
class DerivedStats:
    """Statistics derived from the ledger and the daily goal."""

    today_total: float
    weekly_series: list[WeeklyPoint]
    weekly_average: float
    remaining: float
    percentage: int
    meal_breakdown: list[MealBreakdown]
