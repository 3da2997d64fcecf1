from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from guardian.core.errors import NotFoundError, ValidationError
from guardian.core.logger import logger
from guardian.models.hazard import HazardReport
from guardian.models.user import User
from guardian.schemas.hazard import HazardReportCreate, HazardStats


# Moderation moves a report forward only; anything not listed is refused
ALLOWED_TRANSITIONS: Dict[str, set] = {
    "pending": {"verified", "rejected"},
    "verified": {"resolved"},
}


def list_reports(
    db: Session,
    status: Optional[str] = None,
    hazard_type: Optional[str] = None,
    severity: Optional[str] = None,
    q: Optional[str] = None,
) -> List[HazardReport]:
    query = db.query(HazardReport)
    if status:
        query = query.filter(HazardReport.status == status)
    if hazard_type:
        query = query.filter(HazardReport.type == hazard_type)
    if severity:
        query = query.filter(HazardReport.severity == severity)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.outerjoin(User, HazardReport.reported_by == User.id).filter(
            or_(
                HazardReport.location.ilike(pattern),
                HazardReport.type.ilike(pattern),
                HazardReport.description.ilike(pattern),
                User.display_name.ilike(pattern),
                User.email.ilike(pattern),
            )
        )
    return query.order_by(HazardReport.id.desc()).all()


def create_report(db: Session, payload: HazardReportCreate, reporter: Optional[User]) -> HazardReport:
    report = HazardReport(
        lat=payload.lat,
        lng=payload.lng,
        type=payload.type,
        severity=payload.severity,
        description=payload.description,
        location=payload.location,
        status="pending",
        reported_by=reporter.id if reporter else None,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info(
        "Hazard report id=%s type=%s severity=%s submitted by %s",
        report.id,
        report.type,
        report.severity,
        report.reported_by or "anonymous",
    )
    return report


def update_status(db: Session, report_id: int, status: str, moderator: User) -> HazardReport:
    report: Optional[HazardReport] = db.query(HazardReport).filter(HazardReport.id == report_id).first()
    if not report:
        raise NotFoundError("Hazard report not found")
    if status not in ALLOWED_TRANSITIONS.get(report.status, set()):
        raise ValidationError(f"Cannot move report from {report.status} to {status}")
    report.status = status
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("Hazard report id=%s marked %s by user id=%s", report.id, status, moderator.id)
    return report


def stats(db: Session) -> HazardStats:
    counts = dict(
        db.query(HazardReport.status, func.count(HazardReport.id)).group_by(HazardReport.status).all()
    )
    active_users = db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar() or 0
    return HazardStats(
        total=sum(counts.values()),
        pending=counts.get("pending", 0),
        verified=counts.get("verified", 0),
        resolved=counts.get("resolved", 0),
        rejected=counts.get("rejected", 0),
        active_users=active_users,
    )
