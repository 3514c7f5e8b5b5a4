# tests/test_aggregation.py
from datetime import datetime

import pytest

from fittrack.errors import NotFound


def _log(food_store, user, when, calories, protein=0, carbs=0, fat=0, name="food"):
    return food_store.insert({
        "user": user,
        "foodName": name,
        "quantity": None,
        "calories": calories,
        "protein": protein,
        "carbs": carbs,
        "fat": fat,
        "date": when,
    })


def _goal(goal_store, user, when, calories=2000, protein=150, carbs=200, fat=60):
    return goal_store.insert({
        "user": user,
        "dailyCalories": calories,
        "dailyProtein": protein,
        "dailyCarbs": carbs,
        "dailyFat": fat,
        "bmi": "22.86",
        "createdAt": when,
    })


# ── today ────────────────────────────────────────────────────────────
def test_today_window(aggregation, food_store):
    _log(food_store, "alice", datetime(2026, 3, 13, 23, 59, 0), 999)   # yesterday
    _log(food_store, "alice", datetime(2026, 3, 14, 0, 0, 0), 100)     # midnight, included
    _log(food_store, "alice", datetime(2026, 3, 14, 8, 15, 0), 350)
    _log(food_store, "bob", datetime(2026, 3, 14, 9, 0, 0), 700)

    today = aggregation.get_today("alice")

    assert today["totalCalories"] == 450
    assert [e["calories"] for e in today["entries"]] == [100, 350]


def test_today_is_idempotent(aggregation, food_store):
    _log(food_store, "alice", datetime(2026, 3, 14, 7, 0, 0), 300, protein=20)
    assert aggregation.get_today("alice") == aggregation.get_today("alice")


def test_today_empty(aggregation):
    assert aggregation.get_today("alice") == {"entries": [], "totalCalories": 0}


# ── history ──────────────────────────────────────────────────────────
def test_history_groups_by_day(aggregation, food_store):
    _log(food_store, "alice", datetime(2026, 3, 12, 19, 0, 0), 200)
    _log(food_store, "alice", datetime(2026, 3, 11, 8, 0, 0), 100)
    _log(food_store, "alice", datetime(2026, 3, 11, 13, 0, 0), 150)
    _log(food_store, "bob", datetime(2026, 3, 11, 13, 0, 0), 5000)

    assert aggregation.get_history("alice") == [
        {"date": "2026-03-11", "totalCalories": 250},
        {"date": "2026-03-12", "totalCalories": 200},
    ]


def test_history_empty(aggregation):
    assert aggregation.get_history("alice") == []


# ── remaining allowance ──────────────────────────────────────────────
def test_remaining_requires_goal(aggregation):
    with pytest.raises(NotFound) as exc:
        aggregation.get_remaining_allowance("alice")
    assert str(exc.value) == "Goal not found"


def test_remaining_uses_latest_goal(aggregation, food_store, goal_store):
    _goal(goal_store, "alice", datetime(2026, 3, 1), calories=1800)
    _goal(goal_store, "alice", datetime(2026, 3, 10), calories=2000)
    _goal(goal_store, "bob", datetime(2026, 3, 12), calories=3000)
    _log(food_store, "alice", datetime(2026, 3, 14, 8, 0, 0), 500, protein=30, carbs=60, fat=10)
    _log(food_store, "alice", datetime(2026, 3, 14, 12, 0, 0), 700, protein=40, carbs=90, fat=25)

    assert aggregation.get_remaining_allowance("alice") == {
        "remainingCalories": 800,
        "remainingProtein": 80,
        "remainingCarbs": 50,
        "remainingFat": 25,
    }


def test_remaining_goes_negative(aggregation, food_store, goal_store):
    _goal(goal_store, "alice", datetime(2026, 3, 1), calories=2000)
    _log(food_store, "alice", datetime(2026, 3, 14, 8, 0, 0), 1300)
    _log(food_store, "alice", datetime(2026, 3, 14, 11, 0, 0), 1000)

    assert aggregation.get_remaining_allowance("alice")["remainingCalories"] == -300


def test_remaining_after_active_goal_deleted(aggregation, goal_store):
    old = _goal(goal_store, "alice", datetime(2026, 3, 1), calories=1800)
    new = _goal(goal_store, "alice", datetime(2026, 3, 10), calories=2000)

    goal_store.delete(new["id"], "alice")
    assert aggregation.get_remaining_allowance("alice")["remainingCalories"] == 1800

    goal_store.delete(old["id"], "alice")
    with pytest.raises(NotFound):
        aggregation.get_remaining_allowance("alice")
