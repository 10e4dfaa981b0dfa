# schemas/plan.py
from pydantic import BaseModel, Field
from typing import Literal

PlanType = Literal["diet", "workout"]


class PlanGenerateRequest(BaseModel):
    total_weeks: int = Field(12, ge=1, le=52)


class CompletionToggle(BaseModel):
    completed: bool | None = None  # None 이면 현재 상태를 뒤집음
