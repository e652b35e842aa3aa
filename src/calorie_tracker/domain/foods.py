"""Domain models for logged foods."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class MealType(str, Enum):
    """Meal a food entry belongs to, in display order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodEntry:
    """One logged food occurrence."""

    id: int | None
    name: str
    calories: float
    quantity: float
    meal: MealType
    date: date
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0

    @property
    def calories_contributed(self) -> float:
        """Calories per unit multiplied by quantity."""
        return self.calories * self.quantity


@dataclass(frozen=True)
class FoodDraft:
    """Prefilled values for the manual logging form."""

    name: str
    calories: float
    quantity: float = 1
