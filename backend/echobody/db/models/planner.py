# echobody/db/models/planner.py
# 플래너 기록 — meal / workout share one record shape

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


class PlanKind(str, Enum):
    MEAL = "meal"
    WORKOUT = "workout"

    @property
    def collection(self) -> str:
        return {"meal": "mealplanners", "workout": "workoutplanners"}[self.value]

    @property
    def label(self) -> str:
        return {"meal": "Meal Planner", "workout": "Workout Planner"}[self.value]


ALL_LABEL = "All Planner"


class PlanRecord(BaseModel):
    userId: str
    aiResponse: Any  # completion text/JSON, stored verbatim
    timestamp: datetime
