from fastapi import APIRouter, Depends, HTTPException

from fittrack.api.models.goal_model import GoalRequest
from fittrack.api.routes.http_errors import to_http
from fittrack.api.services.goal_service import get_goal_engine
from fittrack.dependencies import get_current_user
from fittrack.errors import FitTrackError

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile")
async def view_profile(user=Depends(get_current_user), engine=Depends(get_goal_engine)):
    try:
        profile = engine.get_profile(user["user_id"])
        return {"success": True, **profile}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.post("/goal", status_code=201)
async def create_goal(payload: GoalRequest, user=Depends(get_current_user), engine=Depends(get_goal_engine)):
    try:
        goal = engine.create_goal(user["user_id"], payload.model_dump())
        return {"success": True, "message": "Goal set successfully!", "goal": goal}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.get("/goal/history")
async def goal_history(user=Depends(get_current_user), engine=Depends(get_goal_engine)):
    try:
        return {"success": True, "goals": engine.list_goals(user["user_id"])}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.get("/goal/{goal_id}")
async def view_goal(goal_id: str, user=Depends(get_current_user), engine=Depends(get_goal_engine)):
    try:
        return {"success": True, "goal": engine.get_goal(user["user_id"], goal_id)}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.put("/goal/{goal_id}")
async def update_goal(goal_id: str, payload: GoalRequest, user=Depends(get_current_user), engine=Depends(get_goal_engine)):
    try:
        goal = engine.update_goal(user["user_id"], goal_id, payload.model_dump())
        return {"success": True, "message": "Goal updated successfully!", "goal": goal}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")


@router.delete("/goal/{goal_id}")
async def delete_goal(goal_id: str, user=Depends(get_current_user), engine=Depends(get_goal_engine)):
    try:
        engine.delete_goal(user["user_id"], goal_id)
        return {"success": True, "message": "Goal deleted successfully."}
    except FitTrackError as e:
        raise to_http(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {e}")
