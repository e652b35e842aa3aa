"""Statistics derived from the food ledger.

Every function here is pure: the stats are recomputed in full from the
entries, the goal and the current day whenever any of them changes.
"""

import math
from collections.abc import Iterable
from datetime import date, timedelta

from calorie_tracker.domain.foods import FoodEntry, MealType
from calorie_tracker.domain.stats import DerivedStats, MealBreakdown, WeeklyPoint

WEEK_DAYS = 7
_WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def day_total(entries: Iterable[FoodEntry], day: date) -> float:
    """Sum calories contributed by entries logged on a day."""
    return sum(
        (entry.calories_contributed for entry in entries if entry.date == day), 0.0
    )


def today_total(entries: Iterable[FoodEntry], today: date) -> float:
    """Return calories consumed today."""
    return day_total(entries, today)


def weekly_series(
    entries: Iterable[FoodEntry], goal: int, today: date
) -> list[WeeklyPoint]:
    """Return daily totals for today and the six days before, oldest first."""
    entries = list(entries)
    series = []
    for offset in range(WEEK_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append(
            WeeklyPoint(
                day=day,
                label=_WEEKDAY_LABELS[day.weekday()],
                total=day_total(entries, day),
                goal=goal,
            )
        )
    return series


def weekly_average(series: list[WeeklyPoint]) -> float:
    """Average over the whole week; days without entries count as zero."""
    return sum(point.total for point in series) / WEEK_DAYS


def remaining(goal: int, consumed: float) -> float:
    """Calories left before reaching the goal, never negative."""
    return max(0.0, goal - consumed)


def percentage(goal: int, consumed: float) -> int:
    """Percent of the goal consumed, clamped to 0..100.

    A non-positive goal has no meaningful ratio and reports 0.
    """
    if goal <= 0:
        return 0
    return max(0, min(100, round_half_up(100 * consumed / goal)))


def meal_breakdown(entries: Iterable[FoodEntry], today: date) -> list[MealBreakdown]:
    """Calories and counts per meal type for today, in fixed meal order."""
    todays = [entry for entry in entries if entry.date == today]
    breakdown = []
    for meal in MealType:
        meal_entries = [entry for entry in todays if entry.meal == meal]
        breakdown.append(
            MealBreakdown(
                meal=meal,
                calories=sum(
                    (entry.calories_contributed for entry in meal_entries), 0.0
                ),
                count=len(meal_entries),
            )
        )
    return breakdown


def compute_stats(
    entries: Iterable[FoodEntry], goal: int, today: date
) -> DerivedStats:
    """Compute every derived statistic from scratch."""
    entries = list(entries)
    consumed = today_total(entries, today)
    series = weekly_series(entries, goal, today)
    return DerivedStats(
        today_total=consumed,
        weekly_series=series,
        weekly_average=weekly_average(series),
        remaining=remaining(goal, consumed),
        percentage=percentage(goal, consumed),
        meal_breakdown=meal_breakdown(entries, today),
    )


def progress_message(stats: DerivedStats, goal: int) -> str:
    """Human readable progress line for the dashboard."""
    if stats.percentage >= 100 and stats.today_total > goal:
        over = round_half_up(stats.today_total - goal)
        return f"You've exceeded your daily goal by {over} calories"
    return f"{round_half_up(stats.remaining)} calories remaining for today"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)
