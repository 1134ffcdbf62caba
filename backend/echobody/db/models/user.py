# echobody/db/models/user.py
# 사용자 문서 스키마 — embedded health profile + device link

from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class HeartRateReading(BaseModel):
    timestamp: datetime
    heartRate: float


class HealthProfile(BaseModel):
    weight: Optional[float] = None
    start_weight: Optional[float] = None
    target_weight: Optional[float] = None
    height: Optional[float] = None
    activity_level: Optional[str] = None
    target_exercise: Optional[str] = None
    bmi: Optional[float] = None
    steps: Optional[int] = None
    target_steps: Optional[int] = None
    caloriesBurned: Optional[float] = None
    sleepHours: Optional[float] = None
    heartRateReadings: Optional[List[HeartRateReading]] = None


class DeviceLink(BaseModel):
    user_id: str
    resource: Optional[str] = None
    reference_id: Optional[str] = None
    lan: Optional[str] = None


class DevicePatch(BaseModel):
    # partial update: user_id may be left out, the stored one stays
    user_id: Optional[str] = None
    resource: Optional[str] = None
    reference_id: Optional[str] = None
    lan: Optional[str] = None


# DB 저장 문서
class UserDoc(BaseModel):
    name: str
    gender: Optional[str] = None
    dateOfBirth: Optional[datetime] = None
    email: Optional[str] = None
    passwordHash: Optional[str] = None
    authToken: Optional[str] = None
    createdAt: datetime
    lastLogin: Optional[datetime] = None
    health: Optional[HealthProfile] = None
    device: Optional[DeviceLink] = None


class UserPatch(BaseModel):
    name: Optional[str] = None
    gender: Optional[str] = None
    dateOfBirth: Optional[datetime] = None
    email: Optional[str] = None
    health: Optional[HealthProfile] = None
    device: Optional[DevicePatch] = None
