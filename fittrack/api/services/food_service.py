from fittrack.api.services.estimation_service import get_estimation_client
from fittrack.api.services.goal_service import get_goal_store
from fittrack.db_connection import food_col
from fittrack.stores import FoodEntryStore
from fittrack.suggest.meal_sug import MealSuggester
from fittrack.tracker.aggregation import AggregationEngine
from fittrack.tracker.food_engine import FoodEntryEngine


def get_food_store() -> FoodEntryStore:
    return FoodEntryStore(food_col)


def get_food_engine() -> FoodEntryEngine:
    return FoodEntryEngine(get_estimation_client(), get_food_store())


def get_aggregation_engine() -> AggregationEngine:
    return AggregationEngine(get_food_store(), get_goal_store())


def get_meal_suggester() -> MealSuggester:
    return MealSuggester(get_estimation_client(), get_aggregation_engine())
