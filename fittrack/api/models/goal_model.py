from pydantic import BaseModel, Field
from typing import Literal

GoalType = Literal["Fat Loss", "Weight Gain"]
ExerciseLevel = Literal[
    "Sedentary (little or no exercise)",
    "Lightly active (light exercise/sports 1-3 days/week)",
    "Moderately active (moderate exercise/sports 3-5 days/week)",
    "Very active (hard exercise/sports 6-7 days a week)",
    "Extra active (very hard exercise/physical job)",
]
TargetTime = Literal["1 month", "3 months", "6 months", "1 year", "More than 1 year"]


class GoalRequest(BaseModel):
    goalType: GoalType
    age: int = Field(..., gt=0)
    height: float = Field(..., gt=0, description="Height in cm")
    currentWeight: float = Field(..., gt=0, description="Weight in kg")
    targetWeight: float = Field(..., gt=0, description="Weight in kg")
    exerciseLevel: ExerciseLevel
    targetTime: TargetTime
