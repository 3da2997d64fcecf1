from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from guardian.db.session import get_db
from guardian.models.user import User
from guardian.security.deps import require_admin
from guardian.schemas.auth import UserOut, UpdateUserActiveRequest, UpdateUserRoleRequest
from guardian.services import accounts


router = APIRouter()


@router.get("/users", response_model=List[UserOut])
def list_users(_: User = Depends(require_admin), db: Session = Depends(get_db)) -> List[UserOut]:
    return accounts.list_users(db)


@router.patch("/users/{user_id}/active", response_model=UserOut)
def update_user_active(
    user_id: int,
    payload: UpdateUserActiveRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> UserOut:
    return accounts.set_active(db, user_id, payload.is_active)


@router.patch("/users/{user_id}/role", response_model=UserOut)
def update_user_role(
    user_id: int,
    payload: UpdateUserRoleRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> UserOut:
    return accounts.set_role(db, user_id, payload.role)
