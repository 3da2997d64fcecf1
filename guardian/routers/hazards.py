from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from guardian.db.session import get_db
from guardian.models.user import User
from guardian.schemas.hazard import (
    HazardReportCreate,
    HazardReportOut,
    HazardStats,
    HazardStatus,
    HazardStatusUpdate,
    HazardType,
    Severity,
)
from guardian.security.deps import get_optional_user, require_admin
from guardian.services import hazards


router = APIRouter()


@router.get("/hazards", response_model=List[HazardReportOut])
def list_hazards(
    db: Session = Depends(get_db),
    status_filter: Optional[HazardStatus] = Query(default=None, alias="status"),
    hazard_type: Optional[HazardType] = Query(default=None, alias="type"),
    severity: Optional[Severity] = None,
    q: Optional[str] = Query(default=None, max_length=100),
) -> List[HazardReportOut]:
    return hazards.list_reports(db, status=status_filter, hazard_type=hazard_type, severity=severity, q=q)


@router.get("/hazards/stats", response_model=HazardStats)
def hazard_stats(
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> HazardStats:
    return hazards.stats(db)


@router.post("/hazards", response_model=HazardReportOut, status_code=status.HTTP_201_CREATED)
def submit_hazard(
    payload: HazardReportCreate,
    db: Session = Depends(get_db),
    reporter: Optional[User] = Depends(get_optional_user),
) -> HazardReportOut:
    return hazards.create_report(db, payload, reporter)


@router.patch("/hazards/{report_id}/status", response_model=HazardReportOut)
def update_hazard_status(
    report_id: int,
    payload: HazardStatusUpdate,
    moderator: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> HazardReportOut:
    return hazards.update_status(db, report_id, payload.status, moderator)
