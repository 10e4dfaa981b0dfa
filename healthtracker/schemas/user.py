# schemas/user.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"

Gender = Literal["male", "female", "other"]
HealthCondition = Literal["Diabetes", "PCOS", "High Blood Pressure", "None"]
FitnessGoal = Literal["Muscle Building", "Fat Burning", "Weight Gain", "General Fitness"]


class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UserLogin(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UpdateDetails(BaseModel):
    username: str | None = Field(None, min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: str | None = Field(None, pattern=EMAIL_PATTERN)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str | None) -> str | None:
        return value.strip().lower() if value else value


class UpdatePassword(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class ForgotPassword(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class ResetPassword(BaseModel):
    password: str = Field(..., min_length=6)


class ProfileUpdate(BaseModel):
    """부분 수정용. 보내지 않은 필드는 그대로 유지됩니다."""
    age: int | None = Field(None, ge=13, le=120)
    gender: Gender | None = None
    height: float | None = Field(None, ge=50, le=300)
    weight: float | None = Field(None, ge=20, le=500)
    health_conditions: List[HealthCondition] | None = None
    fitness_goal: FitnessGoal | None = None
    profile_image: str | None = None


class Onboarding(BaseModel):
    age: int = Field(..., ge=13, le=120)
    gender: Gender
    height: float = Field(..., ge=50, le=300)
    weight: float = Field(..., ge=20, le=500)
    health_conditions: List[HealthCondition] = Field(default_factory=list)
    fitness_goal: FitnessGoal
    profile_image: str | None = None


class DeleteAccount(BaseModel):
    password: str = Field(..., min_length=1)
