import logging
from typing import Any, Dict

from fittrack.errors import InvalidEstimationShape, NotFound
from fittrack.estimation.extractor import RAW_LOG_LIMIT, extract
from fittrack.tracker.food_engine import parse_nutrients

logger = logging.getLogger(__name__)

MEAL_PROMPT = """
Based on the remaining daily nutrition goals:
- Calories: {remainingCalories}
- Protein: {remainingProtein}g
- Carbs: {remainingCarbs}g
- Fat: {remainingFat}g

Suggest a single meal (breakfast, lunch, or dinner) that helps meet these targets.
Provide the response as a JSON object with keys "meal_suggestion" and "estimated_nutrition".
"meal_suggestion" should be a string describing the meal.
"estimated_nutrition" should be an object with "calories", "protein", "carbs", and "fat".
Example: {{
  "meal_suggestion": "Grilled chicken salad with a light vinaigrette.",
  "estimated_nutrition": {{ "calories": 350, "protein": 40, "carbs": 10, "fat": 15 }}
}}
"""


def build_meal_prompt(remaining: Dict[str, Any]) -> str:
    return MEAL_PROMPT.format(**remaining)


class MealSuggester:
    def __init__(self, client, aggregation):
        self.client = client
        self.aggregation = aggregation

    def suggest_meal(self, user_id: str) -> Dict[str, Any]:
        try:
            remaining = self.aggregation.get_remaining_allowance(user_id)
        except NotFound as e:
            raise NotFound("Goal not found. Please set your goal first.") from e

        text = self.client.generate(build_meal_prompt(remaining))
        data = extract(text)
        suggestion = data.get("meal_suggestion")
        if not isinstance(suggestion, str) or not suggestion.strip():
            logger.warning("Meal suggestion without text: %r", text[:RAW_LOG_LIMIT])
            raise InvalidEstimationShape("Estimation response missing: meal_suggestion")

        nutrition = data.get("estimated_nutrition")
        if not isinstance(nutrition, dict):
            nutrition = {}
        logger.info("Meal suggested for user %s", user_id)
        return {
            "meal_suggestion": suggestion.strip(),
            "estimated_nutrition": parse_nutrients(nutrition),
            "remaining": remaining,
        }
