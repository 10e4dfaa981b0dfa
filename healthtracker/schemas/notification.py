# schemas/notification.py
from pydantic import BaseModel, Field
from typing import Literal

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ReminderUpdate(BaseModel):
    enabled: bool
    time: str = Field("18:00", pattern=TIME_PATTERN)


class TestNotification(BaseModel):
    type: Literal["email", "push"] = "push"
