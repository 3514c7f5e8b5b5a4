from pydantic import BaseModel
from typing import Optional


class FoodEntryRequest(BaseModel):
    foodName: str
    quantity: Optional[str] = None
