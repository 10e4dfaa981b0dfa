# schemas/settings.py
from pydantic import BaseModel, Field
from typing import Literal


class NotificationSettings(BaseModel):
    emailNotifications: bool = True
    pushNotifications: bool = True
    workoutReminders: bool = True
    dietReminders: bool = True
    progressUpdates: bool = True


class PrivacySettings(BaseModel):
    profileVisibility: Literal["public", "private", "friends"] = "public"
    shareProgress: bool = True
    dataCollection: bool = True


class AppSettings(BaseModel):
    theme: Literal["light", "dark", "auto"] = "light"
    language: Literal["en", "es", "fr", "de"] = "en"
    units: Literal["metric", "imperial"] = "metric"
    autoSave: bool = True


class UserSettings(BaseModel):
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)
    appSettings: AppSettings = Field(default_factory=AppSettings)


class UserSettingsUpdate(BaseModel):
    # 그룹 단위 부분 수정
    notifications: NotificationSettings | None = None
    privacy: PrivacySettings | None = None
    appSettings: AppSettings | None = None
