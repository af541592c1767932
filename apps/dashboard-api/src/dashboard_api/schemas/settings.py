from typing import Literal

from pydantic import BaseModel, Field


class TrafficKeyUpdate(BaseModel):
    api_key: str = Field(min_length=1, max_length=256)


class TrafficKeyTestRequest(BaseModel):
    api_key: str | None = Field(default=None, max_length=256)


class TrafficKeyStatus(BaseModel):
    configured: bool
    masked_key: str | None
    source: Literal["override", "environment", "none"]


class TrafficKeyTestResult(BaseModel):
    valid: bool


class OnboardingState(BaseModel):
    client_id: str
    tour_complete: bool
