from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from guardian.schemas.base import CamelModel


HazardType = Literal[
    "landslide",
    "fallen_tree",
    "slippery_rock",
    "flash_flood",
    "trail_damage",
    "wildlife",
    "other",
]
Severity = Literal["low", "moderate", "high", "extreme"]
HazardStatus = Literal["pending", "verified", "resolved", "rejected"]


class HazardReportCreate(CamelModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    type: HazardType
    severity: Severity
    description: str = Field(min_length=1, max_length=1000)
    location: Optional[str] = Field(default=None, max_length=200)


class HazardReportOut(CamelModel):
    id: int
    lat: float
    lng: float
    type: HazardType
    severity: Severity
    description: str
    location: Optional[str]
    status: HazardStatus
    reported_by: Optional[int]
    reported_at: datetime


class HazardStatusUpdate(CamelModel):
    status: HazardStatus


class HazardStats(CamelModel):
    total: int
    pending: int
    verified: int
    resolved: int
    rejected: int
    active_users: int
