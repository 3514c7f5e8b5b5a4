from functools import lru_cache

from fittrack.estimation.gemini_client import GeminiEstimationClient


@lru_cache
def get_estimation_client() -> GeminiEstimationClient:
    return GeminiEstimationClient()
