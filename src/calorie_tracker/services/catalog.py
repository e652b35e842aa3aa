"""Common foods offered for quick logging."""

from dataclasses import dataclass

from calorie_tracker.domain.foods import FoodDraft


@dataclass(frozen=True)
class CommonFood:
    """Food with a preset calorie value per serving."""

    name: str
    calories: int


COMMON_FOODS: tuple[CommonFood, ...] = (
    CommonFood("Apple", 95),
    CommonFood("Banana", 105),
    CommonFood("Chicken Breast (100g)", 165),
    CommonFood("Rice (1 cup)", 205),
    CommonFood("Bread Slice", 80),
    CommonFood("Egg", 70),
    CommonFood("Milk (1 cup)", 150),
    CommonFood("Pasta (1 cup)", 220),
    CommonFood("Salmon (100g)", 208),
    CommonFood("Broccoli (1 cup)", 25),
    CommonFood("Yogurt (1 cup)", 150),
    CommonFood("Oatmeal (1 cup)", 150),
)


@dataclass
class FoodCatalog:
    """Lookup over the quick-add foods."""

    foods: tuple[CommonFood, ...] = COMMON_FOODS

    def find(self, name: str) -> CommonFood | None:
        """Return the food with a matching name, ignoring case."""
        wanted = name.strip().lower()
        for food in self.foods:
            if food.name.lower() == wanted:
                return food
        return None

    def as_draft(self, food: CommonFood) -> FoodDraft:
        """Prefill the logging form with one serving of a food."""
        return FoodDraft(name=food.name, calories=food.calories, quantity=1)
