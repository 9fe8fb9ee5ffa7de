"""
Tests for meal plans: the in-memory grid, nutrition arithmetic, the coach
routes and the client's weekly view.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_admin, make_customer, auth_headers
from app.exceptions import ServiceValidationError
from domain import nutrition
from domain.clock import today, week_start
from domain.meal_grid import MealEntry, MealPlanGrid
from services.auth_service import AuthService


OATS = MealEntry("Overnight oats", calories=420, protein_g=18, carbs_g=60, fat_g=12)
SALAD = MealEntry("Chickpea salad", calories=560, protein_g=22, carbs_g=58, fat_g=24)
SALMON = MealEntry("Salmon with quinoa", calories=640, protein_g=42, carbs_g=48, fat_g=26)


# =============================================================================
# GRID
# =============================================================================


def test_grid_set_get_clear():
    grid = MealPlanGrid()
    grid.set(0, "breakfast", OATS)
    assert grid.get(0, "breakfast") == OATS
    assert grid.get(0, "lunch") is None
    assert len(grid) == 1

    grid.clear(0, "breakfast")
    grid.clear(0, "breakfast")
    assert len(grid) == 0


def test_grid_rejects_unknown_cells():
    grid = MealPlanGrid()
    with pytest.raises(ServiceValidationError):
        grid.set(7, "lunch", SALAD)
    with pytest.raises(ServiceValidationError):
        grid.set(0, "brunch", SALAD)


def test_grid_copy_paste():
    grid = MealPlanGrid()
    assert grid.paste(1, "lunch") is False

    grid.set(0, "lunch", SALAD)
    grid.copy(0, "lunch")
    assert grid.paste(1, "lunch") is True
    assert grid.paste(2, "dinner") is True
    assert grid.get(2, "dinner").recipe_name == "Chickpea salad"

    # Copying an empty cell empties the clipboard
    assert grid.copy(6, "snack") is None
    assert grid.paste(3, "lunch") is False


def test_grid_rows_ordered_by_day_then_meal():
    grid = MealPlanGrid()
    grid.set(1, "dinner", SALMON)
    grid.set(0, "snack", OATS)
    grid.set(1, "breakfast", OATS)
    grid.set(0, "lunch", SALAD)

    rows = grid.to_rows()
    assert [(r["day_of_week"], r["meal_type"]) for r in rows] == [
        (0, "lunch"),
        (0, "snack"),
        (1, "breakfast"),
        (1, "dinner"),
    ]
    assert rows[0]["recipe_name"] == "Chickpea salad"
    assert rows[0]["calories"] == 560


# =============================================================================
# NUTRITION
# =============================================================================


def test_nutrition_summary_averages_planned_days():
    grid = MealPlanGrid()
    grid.set(0, "breakfast", OATS)
    grid.set(0, "lunch", SALAD)
    grid.set(1, "dinner", SALMON)

    summary = nutrition.nutrition_summary(grid, 2000)

    assert summary["days"][0]["calories"] == 980
    assert summary["days"][1]["calories"] == 640
    assert summary["days"][2]["calories"] == 0
    assert summary["weekly_totals"]["calories"] == 1620
    assert summary["weekly_totals"]["protein_g"] == 82
    assert summary["weekly_average_calories"] == 810
    assert summary["weekly_average"] == {
        "calories": 810,
        "protein_g": 41,
        "carbs_g": 83,
        "fat_g": 31,
    }
    assert summary["compliance_rate"] == 40
    # 1620 / 7 = 231.4 is rounded before comparing to the goal
    assert summary["average_calories"] == 231
    assert summary["calorie_progress"] == 12


def test_nutrition_summary_rounds_halves_up():
    grid = MealPlanGrid()
    grid.set(0, "dinner", MealEntry("Big dinner", calories=1010))

    summary = nutrition.nutrition_summary(grid, 2000)
    assert summary["compliance_rate"] == 51


def test_round_half_up():
    assert nutrition.round_half_up(12.5) == 13
    assert nutrition.round_half_up(0.5) == 1
    assert nutrition.round_half_up(12.49) == 12
    assert nutrition.percent(1, 8) == 13
    assert nutrition.macro_split(1, 1, 2) == {"protein_pct": 25, "carbs_pct": 25, "fat_pct": 50}
    assert nutrition.macro_split(1, 7, 0) == {"protein_pct": 13, "carbs_pct": 88, "fat_pct": 0}


def test_nutrition_summary_without_goal():
    summary = nutrition.nutrition_summary(MealPlanGrid(), 0)
    assert summary["weekly_average_calories"] == 0
    assert summary["weekly_average"]["protein_g"] == 0
    assert summary["compliance_rate"] == 0
    assert summary["calorie_progress"] == 0


def test_percent_and_macro_split():
    assert nutrition.percent(50, 0) == 0
    assert nutrition.percent(150, 100) == 150
    assert nutrition.percent(150, 100, cap=100) == 100

    assert nutrition.macro_split(0, 0, 0) == {"protein_pct": 33, "carbs_pct": 33, "fat_pct": 34}
    assert nutrition.macro_split(25, 50, 25) == {"protein_pct": 25, "carbs_pct": 50, "fat_pct": 25}


def test_shopping_list_groups_and_counts():
    grid = MealPlanGrid()
    for day in (0, 2, 4):
        grid.set(day, "breakfast", OATS)
    grid.set(0, "lunch", SALAD)
    grid.set(5, "dinner", SALMON)

    groups = nutrition.shopping_list(grid, days=range(5), checked=["Chickpea salad"])
    assert list(groups) == ["breakfast", "lunch"]
    assert groups["breakfast"] == [
        {"recipe_name": "Overnight oats", "count": 3, "checked": False}
    ]
    assert groups["lunch"][0]["checked"] is True

    text = nutrition.shopping_list_text(groups)
    assert text.splitlines()[0] == "Shopping list"
    assert "  ○ Overnight oats x3" in text
    assert "  ✓ Chickpea salad" in text


# =============================================================================
# API
# =============================================================================


def _create_plan(admin, customer, start: date, **extra):
    payload = {"customer_id": str(customer.id), "name": "Week 1", "start_date": str(start)}
    payload.update(extra)
    return client.post("/meal-plans", json=payload, headers=auth_headers(admin))


GRID_CELLS = [
    {"day_of_week": 0, "meal_type": "breakfast", "recipe_name": "Overnight oats",
     "calories": 420, "protein_g": 18, "carbs_g": 60, "fat_g": 12},
    {"day_of_week": 0, "meal_type": "lunch", "recipe_name": " Chickpea salad ",
     "calories": 560, "protein_g": 22, "carbs_g": 58, "fat_g": 24},
    {"day_of_week": 3, "meal_type": "breakfast", "recipe_name": "Overnight oats",
     "calories": 420},
]


def test_create_plan_defaults(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)

    r = _create_plan(admin, customer, date(2026, 5, 11))
    assert r.status_code == 201
    plan = r.json()
    assert plan["end_date"] == "2026-05-17"
    assert plan["week_number"] == 1
    assert plan["daily_calories"] == 2000
    assert plan["created_by"] == str(admin.id)
    assert plan["customer_name"] == "Sarah Martinez"


def test_create_plan_rejects_inverted_dates(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)

    r = _create_plan(admin, customer, date(2026, 5, 11), end_date="2026-05-01")
    assert r.status_code == 422


def test_save_grid_replaces_items(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    plan = _create_plan(admin, customer, date(2026, 5, 11), daily_calories=1800).json()

    r = client.put(
        f"/meal-plans/{plan['id']}/grid", json={"cells": GRID_CELLS}, headers=auth_headers(admin)
    )
    assert r.status_code == 200
    items = r.json()["items"]
    assert len(items) == 3
    assert {i["recipe_name"] for i in items} == {"Overnight oats", "Chickpea salad"}

    r2 = client.put(
        f"/meal-plans/{plan['id']}/grid",
        json={"cells": GRID_CELLS[:1]},
        headers=auth_headers(admin),
    )
    assert len(r2.json()["items"]) == 1

    detail = client.get(f"/meal-plans/{plan['id']}", headers=auth_headers(admin))
    assert [i["meal_type"] for i in detail.json()["items"]] == ["breakfast"]


def test_save_grid_rejects_bad_cell(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    plan = _create_plan(admin, customer, date(2026, 5, 11)).json()

    cell = dict(GRID_CELLS[0], day_of_week=7)
    r = client.put(
        f"/meal-plans/{plan['id']}/grid", json={"cells": [cell]}, headers=auth_headers(admin)
    )
    assert r.status_code == 422


def test_nutrition_and_shopping_list_endpoints(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    plan = _create_plan(admin, customer, date(2026, 5, 11), daily_calories=1000).json()
    client.put(
        f"/meal-plans/{plan['id']}/grid", json={"cells": GRID_CELLS}, headers=auth_headers(admin)
    )

    r = client.get(f"/meal-plans/{plan['id']}/nutrition", headers=auth_headers(admin))
    assert r.status_code == 200
    body = r.json()
    assert body["days"][0]["calories"] == 980
    assert body["weekly_average_calories"] == 700
    assert body["compliance_rate"] == 70

    r2 = client.post(
        f"/meal-plans/{plan['id']}/shopping-list",
        json={"meal_types": ["breakfast"]},
        headers=auth_headers(admin),
    )
    assert r2.status_code == 200
    shopping = r2.json()
    assert shopping["total_items"] == 1
    assert shopping["groups"]["breakfast"][0]["count"] == 2
    assert shopping["text"].startswith("Shopping list: Week 1")


def test_macro_split_endpoint(db_session: Session):
    admin = make_admin(db_session)
    r = client.post(
        "/meal-plans/macro-split",
        json={"protein_g": 30, "carbs_g": 60, "fat_g": 10},
        headers=auth_headers(admin),
    )
    assert r.json() == {"protein_pct": 30, "carbs_pct": 60, "fat_pct": 10}


def test_update_list_and_delete_plan(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    other = make_customer(db_session, admin, "athlete")
    plan = _create_plan(admin, customer, date(2026, 5, 11)).json()
    _create_plan(admin, other, date(2026, 5, 11))

    r = client.put(
        f"/meal-plans/{plan['id']}",
        json={"name": "Week 2", "week_number": 2},
        headers=auth_headers(admin),
    )
    assert r.json()["name"] == "Week 2"

    bad = client.put(
        f"/meal-plans/{plan['id']}",
        json={"end_date": "2026-05-01"},
        headers=auth_headers(admin),
    )
    assert bad.status_code == 400

    listed = client.get(
        "/meal-plans", params={"customer_id": str(customer.id)}, headers=auth_headers(admin)
    )
    assert [p["id"] for p in listed.json()] == [plan["id"]]

    deleted = client.delete(f"/meal-plans/{plan['id']}", headers=auth_headers(admin))
    assert deleted.json()["deleted"] == plan["id"]
    assert client.get(f"/meal-plans/{plan['id']}", headers=auth_headers(admin)).status_code == 404


# =============================================================================
# CLIENT WEEK VIEW
# =============================================================================


def test_client_sees_plan_for_current_week(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    _, token = AuthService.sign_up(
        db_session, customer.profile.email, "secret123", "Sarah Martinez"
    )
    headers = {"Authorization": f"Bearer {token}"}
    monday = week_start(today())

    plan = _create_plan(admin, customer, monday).json()
    client.put(
        f"/meal-plans/{plan['id']}/grid", json={"cells": GRID_CELLS}, headers=auth_headers(admin)
    )

    r = client.get("/client/meal-plan", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["plan"]["id"] == plan["id"]
    assert body["week_start"] == str(monday)
    assert len(body["days"]) == 7
    assert [i["meal_type"] for i in body["days"][0]["items"]] == ["breakfast", "lunch"]
    assert body["days"][0]["total_calories"] == 980
    assert body["days"][3]["date"] == str(monday + timedelta(days=3))

    empty = client.get(
        "/client/meal-plan",
        params={"date": str(monday + timedelta(days=21))},
        headers=headers,
    )
    assert empty.json()["plan"] is None
    assert empty.json()["days"] == []
