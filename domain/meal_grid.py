"""
Weekly meal-plan grid: seven days by four meal types of optional entries.

The grid is edited in memory (set, clear, copy, paste) and then saved as a
whole; storage only ever sees the flattened rows.
"""

from dataclasses import dataclass, asdict, replace
from typing import Dict, Iterable, List, Optional, Tuple

from app.exceptions import ServiceValidationError
from domain.enums import MEAL_TYPES

DAYS = tuple(range(7))  # 0 = Monday


@dataclass(frozen=True)
class MealEntry:
    recipe_name: str
    calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    instructions: Optional[str] = None

    @classmethod
    def from_item(cls, item) -> "MealEntry":
        return cls(
            recipe_name=item.recipe_name,
            calories=item.calories,
            protein_g=item.protein_g,
            carbs_g=item.carbs_g,
            fat_g=item.fat_g,
            instructions=item.instructions,
        )


Cell = Tuple[int, str]


def _check_cell(day: int, meal_type: str) -> Cell:
    if day not in DAYS:
        raise ServiceValidationError(f"day_of_week must be 0..6, got {day}")
    meal_type = getattr(meal_type, "value", meal_type)
    if meal_type not in MEAL_TYPES:
        raise ServiceValidationError(f"Unknown meal type '{meal_type}'")
    return day, meal_type


class MealPlanGrid:
    """In-memory 7x4 grid with a one-entry clipboard"""

    def __init__(self):
        self._cells: Dict[Cell, MealEntry] = {}
        self.clipboard: Optional[MealEntry] = None

    @classmethod
    def from_items(cls, items: Iterable) -> "MealPlanGrid":
        """Build a grid from stored plan items; later rows win on collisions"""
        grid = cls()
        for item in items:
            if item.day_of_week is None or item.meal_type is None:
                continue
            grid.set(item.day_of_week, item.meal_type, MealEntry.from_item(item))
        return grid

    def get(self, day: int, meal_type: str) -> Optional[MealEntry]:
        return self._cells.get(_check_cell(day, meal_type))

    def set(self, day: int, meal_type: str, entry: MealEntry) -> None:
        self._cells[_check_cell(day, meal_type)] = entry

    def clear(self, day: int, meal_type: str) -> None:
        self._cells.pop(_check_cell(day, meal_type), None)

    def copy(self, day: int, meal_type: str) -> Optional[MealEntry]:
        """Put a cell on the clipboard; copying an empty cell clears it"""
        self.clipboard = self.get(day, meal_type)
        return self.clipboard

    def paste(self, day: int, meal_type: str) -> bool:
        if self.clipboard is None:
            return False
        self.set(day, meal_type, replace(self.clipboard))
        return True

    def day_entries(self, day: int) -> List[Tuple[str, MealEntry]]:
        return [
            (meal_type, self._cells[(day, meal_type)])
            for meal_type in MEAL_TYPES
            if (day, meal_type) in self._cells
        ]

    def __len__(self) -> int:
        return len(self._cells)

    def to_rows(self) -> List[dict]:
        """Flatten the non-empty cells, ordered by day then meal slot"""
        rows = []
        for day in DAYS:
            for meal_type, entry in self.day_entries(day):
                rows.append({"day_of_week": day, "meal_type": meal_type, **asdict(entry)})
        return rows
