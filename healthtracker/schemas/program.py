# schemas/program.py
from pydantic import BaseModel, Field
from typing import List


class MonthProgressUpdate(BaseModel):
    diet_compliance: float | None = Field(None, ge=0, le=100)
    workout_compliance: float | None = Field(None, ge=0, le=100)
    weight_change: float | None = None
    achievements: List[str] | None = None
