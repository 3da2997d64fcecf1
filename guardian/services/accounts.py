from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from guardian.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from guardian.core.logger import logger
from guardian.core.settings import Settings
from guardian.models.event import LoginEvent
from guardian.models.user import User
from guardian.schemas.auth import LoginRequest, SignupRequest
from guardian.security.passwords import PasswordHasher


# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "User already exists"
ACCOUNT_DEACTIVATED = "Account is deactivated"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user(db: Session, user_id: int) -> User:
    user: Optional[User] = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def register_user(
    db: Session,
    payload: SignupRequest,
    hasher: PasswordHasher,
    settings: Settings,
) -> User:
    if len(payload.password) < settings.password_min_length:
        raise ValidationError(
            f"Password must be at least {settings.password_min_length} characters"
        )
    if len(payload.password) > settings.password_max_length:
        raise ValidationError(
            f"Password must be at most {settings.password_max_length} characters"
        )

    email = payload.email
    if find_user_by_email(db, email):
        raise ConflictError(USER_EXISTS)

    user = User(
        email=email,
        hashed_password=hasher.hash(payload.password),
        display_name=payload.display_name or email.split("@")[0],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent signup for the same email
        db.rollback()
        raise ConflictError(USER_EXISTS)
    db.refresh(user)
    logger.info("User registered id=%s email=%s", user.id, user.email)
    return user


def authenticate(
    db: Session,
    payload: LoginRequest,
    hasher: PasswordHasher,
    settings: Settings,
) -> User:
    # Over-long passwords can never match a stored hash; fail them exactly
    # like an unknown email
    too_long = len(payload.password) > settings.password_max_length
    user = None if too_long else find_user_by_email(db, payload.email)
    if not user:
        hasher.dummy_verify()
        logger.warning("Login failed: unknown email")
        raise AuthError(INVALID_CREDENTIALS)
    if not hasher.verify(payload.password, user.hashed_password):
        logger.warning("Login failed: bad password for user id=%s", user.id)
        raise AuthError(INVALID_CREDENTIALS)
    if not user.is_active:
        logger.warning("Login refused: user id=%s is deactivated", user.id)
        raise AuthError(ACCOUNT_DEACTIVATED)

    user.last_login = _utcnow()
    db.add(LoginEvent(user_id=user.id, email=user.email))
    db.commit()
    db.refresh(user)
    logger.info("User logged in id=%s", user.id)
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def set_active(db: Session, user_id: int, is_active: bool) -> User:
    user = get_user(db, user_id)
    user.is_active = is_active
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User id=%s %s", user.id, "reactivated" if is_active else "deactivated")
    return user


def set_role(db: Session, user_id: int, role: str) -> User:
    user = get_user(db, user_id)
    user.role = role
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User id=%s role set to %s", user.id, role)
    return user


def list_login_events(
    db: Session,
    user_id: Optional[int] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[LoginEvent]:
    query = db.query(LoginEvent)
    if user_id is not None:
        query = query.filter(LoginEvent.user_id == user_id)
    return query.order_by(LoginEvent.id.desc()).offset(offset).limit(limit).all()
