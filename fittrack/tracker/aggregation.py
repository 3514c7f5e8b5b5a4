"""
Daily and historical totals over a user's food entries.

Reads only the requesting user's records and never calls the estimation
service. "Today" runs from local midnight up to (not including) now.
"""
from datetime import datetime
from typing import Any, Callable, Dict, List

from fittrack.errors import NotFound
from fittrack.tracker.food_engine import NUTRIENTS


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def sum_nutrients(entries: List[Dict[str, Any]]) -> Dict[str, float]:
    totals = {key: 0 for key in NUTRIENTS}
    for entry in entries:
        for key in NUTRIENTS:
            totals[key] += entry.get(key) or 0
    return totals


class AggregationEngine:
    def __init__(self, food_store, goal_store, clock: Callable[[], datetime] = datetime.now):
        self.food_store = food_store
        self.goal_store = goal_store
        self.clock = clock

    def _today_entries(self, user_id: str) -> List[Dict[str, Any]]:
        now = self.clock()
        return self.food_store.find_between(user_id, start_of_day(now), now)

    def get_today(self, user_id: str) -> Dict[str, Any]:
        entries = self._today_entries(user_id)
        total = sum(entry.get("calories") or 0 for entry in entries)
        return {"entries": entries, "totalCalories": total}

    def get_history(self, user_id: str) -> List[Dict[str, Any]]:
        return self.food_store.daily_calories(user_id)

    def get_remaining_allowance(self, user_id: str) -> Dict[str, float]:
        # negative values mean the user is over budget; they are not clamped
        goal = self.goal_store.find_latest(user_id)
        if goal is None:
            raise NotFound("Goal not found")

        totals = sum_nutrients(self._today_entries(user_id))
        return {
            "remainingCalories": goal["dailyCalories"] - totals["calories"],
            "remainingProtein": goal["dailyProtein"] - totals["protein"],
            "remainingCarbs": goal["dailyCarbs"] - totals["carbs"],
            "remainingFat": goal["dailyFat"] - totals["fat"],
        }
