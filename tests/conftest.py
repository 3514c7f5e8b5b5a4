# tests/conftest.py
from __future__ import annotations

import json
from datetime import datetime

import mongomock
import pytest

from fittrack.errors import EstimationUnavailable
from fittrack.stores import FoodEntryStore, GoalStore
from fittrack.suggest.meal_sug import MealSuggester
from fittrack.tracker.aggregation import AggregationEngine
from fittrack.tracker.food_engine import FoodEntryEngine
from fittrack.tracker.goal_engine import GoalEngine

GOAL_REPLY = json.dumps({
    "daily_goals": {"calories": 2000, "protein": 150, "carbs": 200, "fat": 60},
    "plan": "Eat in a small deficit and lift three times a week.",
})


class StubClient:
    """Estimation client that replays canned replies and records prompts."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise EstimationUnavailable("no reply queued")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def goal_reply():
    return GOAL_REPLY


@pytest.fixture
def db():
    return mongomock.MongoClient()["fittrack_test"]


@pytest.fixture
def goal_store(db):
    return GoalStore(db["goals"])


@pytest.fixture
def food_store(db):
    return FoodEntryStore(db["food_entries"])


@pytest.fixture
def clock():
    return Clock(datetime(2026, 3, 14, 12, 30, 0))


@pytest.fixture
def client():
    return StubClient()


@pytest.fixture
def goal_engine(client, goal_store, clock):
    return GoalEngine(client, goal_store, clock=clock)


@pytest.fixture
def food_engine(client, food_store, clock):
    return FoodEntryEngine(client, food_store, clock=clock)


@pytest.fixture
def aggregation(food_store, goal_store, clock):
    return AggregationEngine(food_store, goal_store, clock=clock)


@pytest.fixture
def suggester(client, aggregation):
    return MealSuggester(client, aggregation)


@pytest.fixture
def biometrics():
    return {
        "goalType": "Fat Loss",
        "age": 30,
        "height": 175,
        "currentWeight": 70,
        "targetWeight": 65,
        "exerciseLevel": "Moderately active (moderate exercise/sports 3-5 days/week)",
        "targetTime": "3 months",
    }
