from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from guardian.db.session import get_db
from guardian.models.user import User
from guardian.schemas.event import LoginEventOut
from guardian.security.deps import require_admin
from guardian.services import accounts


router = APIRouter()


@router.get("/login-events", response_model=List[LoginEventOut])
def list_login_events(
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
    user_id: Optional[int] = Query(default=None, alias="userId"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> List[LoginEventOut]:
    return accounts.list_login_events(db, user_id=user_id, limit=limit, offset=offset)
