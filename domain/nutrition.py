"""
Nutrition arithmetic over meal-plan grids and food logs.

Everything here is pure: it takes entries and returns numbers, so it is used
both by the coach's plan builder and by the client portal.
"""

import math
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from domain.enums import MEAL_TYPES
from domain.meal_grid import DAYS, MealPlanGrid

MACRO_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g")


def _num(value) -> float:
    return float(value) if value is not None else 0.0


def sum_macros(entries: Iterable) -> Dict[str, float]:
    """Sum calories and macro grams; missing values count as zero"""
    totals = {f: 0.0 for f in MACRO_FIELDS}
    for entry in entries:
        for f in MACRO_FIELDS:
            totals[f] += _num(getattr(entry, f, None))
    return totals


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)"""
    return int(math.floor(value + 0.5))


def percent(part: float, whole: float, cap: Optional[int] = None) -> int:
    """Rounded percentage of ``whole``; 0 when there is nothing to compare to"""
    if not whole:
        return 0
    value = round_half_up(part / whole * 100)
    if cap is not None:
        value = min(value, cap)
    return int(value)


def nutrition_summary(grid: MealPlanGrid, daily_goal: int) -> dict:
    """
    Per-day and weekly totals for a plan grid.

    The weekly average only counts days with calories planned; the plain
    ``average_calories`` spreads the week's total over all seven days and is
    rounded before it is compared to the goal.
    """
    days = []
    for day in DAYS:
        totals = sum_macros(entry for _, entry in grid.day_entries(day))
        days.append({"day_of_week": day, **totals})

    weekly = {f: sum(d[f] for d in days) for f in MACRO_FIELDS}
    planned = [d for d in days if d["calories"] > 0]
    weekly_average = {
        f: round_half_up(sum(d[f] for d in planned) / len(planned)) if planned else 0
        for f in MACRO_FIELDS
    }
    average_calories = round_half_up(weekly["calories"] / 7)

    return {
        "days": days,
        "weekly_totals": weekly,
        "weekly_average": weekly_average,
        "weekly_average_calories": weekly_average["calories"],
        "daily_goal": daily_goal or 0,
        "compliance_rate": percent(weekly_average["calories"], daily_goal),
        "average_calories": average_calories,
        "calorie_progress": percent(average_calories, daily_goal),
    }


def macro_split(protein_g: float, carbs_g: float, fat_g: float) -> Dict[str, int]:
    """Share of each macro by grams; an empty meal is shown as 33/33/34"""
    protein_g, carbs_g, fat_g = _num(protein_g), _num(carbs_g), _num(fat_g)
    total = protein_g + carbs_g + fat_g
    if total <= 0:
        return {"protein_pct": 33, "carbs_pct": 33, "fat_pct": 34}
    return {
        "protein_pct": round_half_up(protein_g / total * 100),
        "carbs_pct": round_half_up(carbs_g / total * 100),
        "fat_pct": round_half_up(fat_g / total * 100),
    }


def shopping_list(
    grid: MealPlanGrid,
    days: Iterable[int] = DAYS,
    meal_types: Iterable[str] = MEAL_TYPES,
    checked: Iterable[str] = (),
) -> "OrderedDict[str, List[dict]]":
    """
    Planned recipes for the selected days and meal slots, grouped by meal type.

    Each recipe appears once per group with the number of times it is planned.
    """
    wanted_days = set(days)
    wanted_types = [getattr(m, "value", m) for m in meal_types]
    checked = set(checked)

    groups: "OrderedDict[str, List[dict]]" = OrderedDict()
    for meal_type in MEAL_TYPES:
        if meal_type not in wanted_types:
            continue
        counts: "OrderedDict[str, int]" = OrderedDict()
        for day in DAYS:
            if day not in wanted_days:
                continue
            entry = grid.get(day, meal_type)
            if entry is not None:
                counts[entry.recipe_name] = counts.get(entry.recipe_name, 0) + 1
        if counts:
            groups[meal_type] = [
                {"recipe_name": name, "count": n, "checked": name in checked}
                for name, n in counts.items()
            ]
    return groups


def shopping_list_text(groups: Dict[str, List[dict]], title: str = "Shopping list") -> str:
    """Plain-text export; ticked items are marked with a check"""
    lines = [title, ""]
    for meal_type, items in groups.items():
        lines.append(f"{meal_type.capitalize()}:")
        for item in items:
            mark = "✓" if item["checked"] else "○"
            suffix = f" x{item['count']}" if item["count"] > 1 else ""
            lines.append(f"  {mark} {item['recipe_name']}{suffix}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
