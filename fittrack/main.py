import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fittrack.api.routes.food_route import router as food_router
from fittrack.api.routes.user_route import router as user_router
from fittrack.api.services.food_service import get_food_store
from fittrack.api.services.goal_service import get_goal_store
from fittrack.config import CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        get_goal_store().ensure_indexes()
        get_food_store().ensure_indexes()
    except Exception as e:
        logger.warning("Could not create MongoDB indexes: %s", e)
    yield


app = FastAPI(title="FitTrack API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "Fitness Tracker Backend API"}


app.include_router(user_router)
app.include_router(food_router)
