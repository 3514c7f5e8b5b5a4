import json
import logging
import math
import re
from typing import Any, Dict, Iterable

from fittrack.errors import InvalidEstimationShape, MalformedEstimation

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)

RAW_LOG_LIMIT = 200


def extract(text: str) -> Dict[str, Any]:
    """Pull the JSON object out of a model reply.

    A ```json fenced block wins when present; otherwise the whole trimmed text
    must be JSON. Anything that is not a JSON object raises MalformedEstimation.
    """
    if text is None:
        logger.warning("Estimation response was empty")
        raise MalformedEstimation("Empty estimation response")

    match = _FENCED_JSON.search(text)
    candidate = match.group(1) if match else text
    try:
        data = json.loads(candidate.strip())
    except ValueError as e:
        # JSONDecodeError, and int literals past the digit limit
        logger.warning("Unparseable estimation response: %r", text[:RAW_LOG_LIMIT])
        raise MalformedEstimation(f"Could not parse estimation response: {e}") from e

    if not isinstance(data, dict):
        logger.warning("Estimation response is not an object: %r", text[:RAW_LOG_LIMIT])
        raise MalformedEstimation("Estimation response is not a JSON object")
    return data


def require_keys(data: Dict[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    missing = [k for k in keys if data.get(k) is None]
    if missing:
        raise InvalidEstimationShape(f"Estimation response missing: {', '.join(missing)}")
    return data


def to_number(value: Any):
    """Finite float for ints, floats and numeric strings; None for anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def number_or_zero(value: Any) -> float:
    """Numeric value of ``value``, or 0 when absent, non-numeric or negative."""
    number = to_number(value)
    if number is None or number < 0:
        return 0
    return number
