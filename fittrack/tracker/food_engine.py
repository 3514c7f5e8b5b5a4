import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fittrack.errors import NotFound, Unauthorized, ValidationError
from fittrack.estimation.extractor import extract, number_or_zero

logger = logging.getLogger(__name__)

NUTRIENTS = ("calories", "protein", "carbs", "fat")

FOOD_PROMPT = """
Estimate the calories, protein, carbs, and fat in "{description}".
Provide the response as a JSON object with keys "calories", "protein", "carbs", and "fat".
If you cannot estimate, return "0" for all values.
Example: {{"calories": 250, "protein": 10, "carbs": 20, "fat": 15}}
"""


def describe_food(food_name: str, quantity: Optional[str] = None) -> str:
    quantity = (quantity or "").strip()
    return f"{quantity} of {food_name}" if quantity else food_name


def build_food_prompt(food_name: str, quantity: Optional[str] = None) -> str:
    return FOOD_PROMPT.format(description=describe_food(food_name, quantity))


def parse_nutrients(data: Dict[str, Any]) -> Dict[str, Any]:
    """Every nutrient present and non-negative; absent or junk values become 0.

    A model that answered "0" and one that left the key out are not told apart.
    """
    return {key: number_or_zero(data.get(key)) for key in NUTRIENTS}


class FoodEntryEngine:
    def __init__(self, client, store, clock: Callable[[], datetime] = datetime.now):
        self.client = client
        self.store = store
        self.clock = clock

    def add_food_entry(self, user_id: str, food_name: str, quantity: Optional[str] = None) -> Dict[str, Any]:
        food_name = (food_name or "").strip()
        if not food_name:
            raise ValidationError("Food name is required.")
        quantity = (quantity or "").strip() or None

        text = self.client.generate(build_food_prompt(food_name, quantity))
        nutrients = parse_nutrients(extract(text))

        entry = self.store.insert({
            "user": user_id,
            "foodName": food_name,
            "quantity": quantity,
            **nutrients,
            "date": self.clock(),
        })
        logger.info("Food entry %s (%s, %s kcal) added for user %s",
                    entry["id"], food_name, nutrients["calories"], user_id)
        return entry

    def delete_food_entry(self, user_id: str, entry_id: str) -> None:
        entry = self.store.find_by_id(entry_id)
        if entry is None:
            raise NotFound("Food entry not found.")
        if entry["user"] != user_id:
            raise Unauthorized("User not authorized.")
        self.store.delete(entry_id)
        logger.info("Food entry %s removed for user %s", entry_id, user_id)
