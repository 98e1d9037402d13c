"""Domain models for food logging."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class FoodItem:
    """Flat nutrition record for a single logged food."""

    description: str
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    fat: float = 0.0
    saturated_fat: float = 0.0
    sodium: float = 0.0
    cholesterol: float = 0.0
    uid: str | None = None


@dataclass(frozen=True)
class FoodEntry:
    """A logged food entry grouping one or more items."""

    id: str
    eaten_date: date
    food_items: tuple[FoodItem, ...]
    raw_input: str | None = None
    source_meal_id: str | None = None
    created_at: datetime | None = None

    @property
    def total_calories(self) -> float:
        """Sum of item calories."""
        return sum(item.calories or 0 for item in self.food_items)

    @property
    def items_description(self) -> str:
        """Item descriptions joined by spaces."""
        return " ".join(item.description for item in self.food_items)


@dataclass(frozen=True)
class SavedMeal:
    """A saved meal that can be re-logged."""

    id: str
    name: str
    food_items: tuple[FoodItem, ...]
    items_signature: str | None = None
    use_count: int = 0
    last_used_at: datetime | None = None
