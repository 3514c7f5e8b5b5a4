from fittrack.estimation.gemini_client import GeminiEstimationClient
from fittrack.estimation.extractor import extract, require_keys

__all__ = ["GeminiEstimationClient", "extract", "require_keys"]
