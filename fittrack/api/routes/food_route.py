from fastapi import APIRouter, Depends, HTTPException

from fittrack.api.models.food_model import FoodEntryRequest
from fittrack.api.routes.http_errors import to_http
from fittrack.api.services.food_service import (
    get_aggregation_engine,
    get_food_engine,
    get_meal_suggester,
)
from fittrack.dependencies import get_current_user
from fittrack.errors import FitTrackError

router = APIRouter(prefix="/food", tags=["food"])


@router.post("/add", status_code=201)
async def add_food(payload: FoodEntryRequest, user=Depends(get_current_user), engine=Depends(get_food_engine)):
    try:
        entry = engine.add_food_entry(user["user_id"], payload.foodName, payload.quantity)
        return {"success": True, "message": "Food entry added successfully!", "entry": entry}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.get("/today")
async def todays_food(user=Depends(get_current_user), engine=Depends(get_aggregation_engine)):
    try:
        return {"success": True, **engine.get_today(user["user_id"])}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.get("/history")
async def food_history(user=Depends(get_current_user), engine=Depends(get_aggregation_engine)):
    try:
        return {"success": True, "history": engine.get_history(user["user_id"])}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.get("/remaining")
async def remaining_allowance(user=Depends(get_current_user), engine=Depends(get_aggregation_engine)):
    try:
        return {"success": True, **engine.get_remaining_allowance(user["user_id"])}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.post("/suggestion")
async def meal_suggestion(user=Depends(get_current_user), suggester=Depends(get_meal_suggester)):
    try:
        return {"success": True, "suggestion": suggester.suggest_meal(user["user_id"])}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.delete("/{entry_id}")
async def delete_food(entry_id: str, user=Depends(get_current_user), engine=Depends(get_food_engine)):
    try:
        engine.delete_food_entry(user["user_id"], entry_id)
        return {"success": True, "message": "Food entry removed successfully."}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")
