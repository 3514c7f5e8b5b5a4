from fastapi import HTTPException

from fittrack.errors import (
    EstimationUnavailable,
    FitTrackError,
    NotFound,
    Unauthorized,
    ValidationError,
)


def to_http(error: FitTrackError) -> HTTPException:
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, Unauthorized):
        return HTTPException(status_code=401, detail=str(error))
    if isinstance(error, NotFound):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, EstimationUnavailable):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
