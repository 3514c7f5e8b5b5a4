from fittrack.api.services.estimation_service import get_estimation_client
from fittrack.db_connection import goal_col
from fittrack.stores import GoalStore
from fittrack.tracker.goal_engine import GoalEngine


def get_goal_store() -> GoalStore:
    return GoalStore(goal_col)


def get_goal_engine() -> GoalEngine:
    return GoalEngine(get_estimation_client(), get_goal_store())
