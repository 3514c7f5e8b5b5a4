import logging
import math
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from fittrack.errors import InvalidEstimationShape, NotFound, ValidationError
from fittrack.estimation.extractor import RAW_LOG_LIMIT, extract, require_keys, to_number

logger = logging.getLogger(__name__)

GOAL_TYPES = ("Fat Loss", "Weight Gain")

EXERCISE_LEVELS = (
    "Sedentary (little or no exercise)",
    "Lightly active (light exercise/sports 1-3 days/week)",
    "Moderately active (moderate exercise/sports 3-5 days/week)",
    "Very active (hard exercise/sports 6-7 days a week)",
    "Extra active (very hard exercise/physical job)",
)

TARGET_TIMES = ("1 month", "3 months", "6 months", "1 year", "More than 1 year")

REQUIRED_FIELDS = (
    "goalType",
    "age",
    "height",
    "currentWeight",
    "targetWeight",
    "exerciseLevel",
    "targetTime",
)

MACRO_KEYS = {
    "calories": "dailyCalories",
    "protein": "dailyProtein",
    "carbs": "dailyCarbs",
    "fat": "dailyFat",
}

GOAL_PROMPT = """
Based on the following user data, calculate their daily calorie needs and create a brief, actionable fitness plan.
- Goal: {goalType}
- Age: {age}
- Height: {height} cm
- Current Weight: {currentWeight} kg
- Target Weight: {targetWeight} kg
- Exercise Level: {exerciseLevel}
- Time to Achieve Goal: {targetTime}

Provide the response as a single, minified JSON object with no markdown. The JSON should have two keys:
1. "daily_goals": An object with "calories", "protein", "carbs", and "fat" (all as numbers).
2. "plan": A short (2-3 sentences) descriptive and encouraging fitness plan.

Example:
{{"daily_goals":{{"calories":2000,"protein":150,"carbs":200,"fat":60}},"plan":"To achieve your fat loss goal, focus on a consistent calorie deficit. Incorporate strength training 3-4 times a week to build muscle, and add 2-3 cardio sessions for heart health. Stay hydrated and be patient with your progress!"}}
"""


def bmi_status(bmi) -> str:
    """Weight category for a BMI value; each band includes its lower bound."""
    value = float(bmi)
    if value < 18.5:
        return "Underweight"
    if value < 25:
        return "Normal"
    if value < 30:
        return "Overweight"
    return "Obese"


def compute_bmi(height_cm: float, weight_kg: float) -> Tuple[str, str]:
    """Return ``(bmi, status)`` with bmi as a two-decimal string.

    The status is derived from the rounded value, so 18.499 reports as
    ("18.50", "Normal").
    """
    if not height_cm or height_cm <= 0:
        raise ValidationError("height must be positive")
    height_m = height_cm / 100
    bmi = f"{weight_kg / (height_m * height_m):.2f}"
    return bmi, bmi_status(bmi)


def _positive(value: Any, field: str, integer: bool = False):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite or value <= 0:
        raise ValidationError(f"{field} must be positive")
    if integer:
        if not float(value).is_integer():
            raise ValidationError(f"{field} must be a whole number")
        return int(value)
    return value


def validate_biometrics(data: Dict[str, Any]) -> Dict[str, Any]:
    missing = [f for f in REQUIRED_FIELDS if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if data["goalType"] not in GOAL_TYPES:
        raise ValidationError(f"goalType must be one of: {', '.join(GOAL_TYPES)}")
    if data["exerciseLevel"] not in EXERCISE_LEVELS:
        raise ValidationError("exerciseLevel is not a recognised activity level")
    if data["targetTime"] not in TARGET_TIMES:
        raise ValidationError(f"targetTime must be one of: {', '.join(TARGET_TIMES)}")

    return {
        "goalType": data["goalType"],
        "age": _positive(data["age"], "age", integer=True),
        "height": _positive(data["height"], "height"),
        "currentWeight": _positive(data["currentWeight"], "currentWeight"),
        "targetWeight": _positive(data["targetWeight"], "targetWeight"),
        "exerciseLevel": data["exerciseLevel"],
        "targetTime": data["targetTime"],
    }


def build_goal_prompt(biometrics: Dict[str, Any]) -> str:
    return GOAL_PROMPT.format(**biometrics)


def _daily_target(daily_goals: Dict[str, Any], key: str):
    value = to_number(daily_goals.get(key))
    if value is None or value < 0:
        raise InvalidEstimationShape(f"daily_goals.{key} is not a non-negative number")
    return value


def parse_goal_estimate(text: str) -> Dict[str, Any]:
    """Map a goal-planning reply onto the daily* fields and plan.

    Unlike food estimates nothing is defaulted: a reply without usable
    ``daily_goals`` and ``plan`` cannot seed a goal.
    """
    data = extract(text)
    try:
        return _goal_fields(data)
    except InvalidEstimationShape as e:
        logger.warning("Unusable goal estimate (%s): %r", e, text[:RAW_LOG_LIMIT])
        raise


def _goal_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    require_keys(data, ("daily_goals", "plan"))
    daily_goals = data["daily_goals"]
    if not isinstance(daily_goals, dict):
        raise InvalidEstimationShape("daily_goals is not an object")
    plan = data["plan"]
    if not isinstance(plan, str) or not plan.strip():
        raise InvalidEstimationShape("plan is not a non-empty string")

    fields = {field: _daily_target(daily_goals, key) for key, field in MACRO_KEYS.items()}
    fields["plan"] = plan.strip()
    return fields


class GoalEngine:
    def __init__(self, client, store, clock: Callable[[], datetime] = datetime.now):
        self.client = client
        self.store = store
        self.clock = clock

    def _derive(self, biometrics: Dict[str, Any]) -> Dict[str, Any]:
        fields = validate_biometrics(biometrics)
        bmi, status = compute_bmi(fields["height"], fields["currentWeight"])
        prompt = build_goal_prompt(fields)
        text = self.client.generate(prompt)
        estimate = parse_goal_estimate(text)
        return {**fields, "bmi": bmi, "bmiStatus": status, **estimate}

    def create_goal(self, user_id: str, biometrics: Dict[str, Any]) -> Dict[str, Any]:
        derived = self._derive(biometrics)
        now = self.clock()
        goal = self.store.insert({"user": user_id, **derived, "createdAt": now, "updatedAt": now})
        logger.info("Goal %s created for user %s (bmi %s)", goal["id"], user_id, goal["bmi"])
        return goal

    def update_goal(self, user_id: str, goal_id: str, biometrics: Dict[str, Any]) -> Dict[str, Any]:
        existing = self.store.find_one(goal_id, user_id)
        if existing is None:
            raise NotFound("Goal not found.")

        derived = self._derive(biometrics)
        doc = {
            "user": user_id,
            **derived,
            "createdAt": existing.get("createdAt"),
            "updatedAt": self.clock(),
        }
        goal = self.store.save(goal_id, user_id, doc)
        logger.info("Goal %s updated for user %s", goal_id, user_id)
        return goal

    def get_goal(self, user_id: str, goal_id: str) -> Dict[str, Any]:
        goal = self.store.find_one(goal_id, user_id)
        if goal is None:
            raise NotFound("Goal not found.")
        return goal

    def list_goals(self, user_id: str) -> List[Dict[str, Any]]:
        return self.store.find_all(user_id)

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        if not self.store.delete(goal_id, user_id):
            raise NotFound("Goal not found.")
        logger.info("Goal %s deleted for user %s", goal_id, user_id)

    def get_active_goal(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.store.find_latest(user_id)

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        goal = self.get_active_goal(user_id)
        if goal is not None:
            goal = {**goal, "bmiStatus": bmi_status(goal["bmi"])}
        return {"userId": user_id, "goal": goal}
