from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional


class ClockRequest(BaseModel):
    user_id: int
    user_name: Optional[str] = None
    work_type: Optional[str] = None
    ip: Optional[str] = None
    location: Optional[str] = None
    geolocation: Optional[Any] = None  # free-form payload from the browser


class ClockInResponse(BaseModel):
    success: bool
    time: datetime


class ClockOutResponse(BaseModel):
    success: bool
    duration: str
    time: datetime


class ActiveSessionResponse(BaseModel):
    id: int
    user_id: int
    clock_in_time: datetime

    model_config = {"from_attributes": True}


class ClockLogResponse(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str]
    action: str
    time: datetime
    work_type: Optional[str]
    ip_address: Optional[str]
    location: Optional[str]
    geolocation: Optional[Any]
    duration: Optional[str]

    model_config = {"from_attributes": True}
