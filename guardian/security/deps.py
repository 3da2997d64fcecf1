from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from guardian.core.errors import AuthError, ForbiddenError, NotFoundError
from guardian.core.settings import Settings, get_settings
from guardian.db.session import get_db
from guardian.models.user import User
from guardian.security.jwt_tokens import SessionClaims, TokenSigner
from guardian.security.passwords import PasswordHasher


def get_token_signer(settings: Settings = Depends(get_settings)) -> TokenSigner:
    return TokenSigner.from_settings(settings)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return PasswordHasher.from_settings(settings)


def get_session_claims(
    request: Request,
    settings: Settings = Depends(get_settings),
    signer: TokenSigner = Depends(get_token_signer),
) -> SessionClaims:
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise AuthError("No token provided")
    return signer.verify(token)


def get_current_user(
    claims: SessionClaims = Depends(get_session_claims),
    db: Session = Depends(get_db),
) -> User:
    user: Optional[User] = db.query(User).filter(User.id == claims.user_id).first()
    if not user:
        raise NotFoundError("User not found")
    if not user.is_active:
        raise AuthError("Account is deactivated")
    return user


def get_optional_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    signer: TokenSigner = Depends(get_token_signer),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the session user if a valid cookie is present, otherwise None."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    try:
        claims = signer.verify(token)
    except AuthError:
        return None
    user = db.query(User).filter(User.id == claims.user_id).first()
    if not user or not user.is_active:
        return None
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise ForbiddenError("Admin required")
    return user
