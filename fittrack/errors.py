"""Error taxonomy shared by the goal, food and aggregation engines.

Routes translate these into HTTP status codes.
"""


class FitTrackError(Exception):
    """Base class for every domain failure."""


class ValidationError(FitTrackError, ValueError):
    """Required domain input is missing or malformed."""


class NotFound(FitTrackError, LookupError):
    """Record does not exist, or is not visible to the requesting user."""


class Unauthorized(FitTrackError):
    """Record exists but belongs to another user."""


class EstimationUnavailable(FitTrackError, RuntimeError):
    """The text generator failed or returned unusable content."""


class MalformedEstimation(EstimationUnavailable):
    """No JSON object could be pulled out of the generator's text."""


class InvalidEstimationShape(EstimationUnavailable):
    """JSON parsed, but keys the caller requires are absent or unusable."""
