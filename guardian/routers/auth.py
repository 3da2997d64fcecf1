from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from guardian.core.settings import Settings, get_settings
from guardian.db.session import get_db
from guardian.models.user import User
from guardian.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    PublicUser,
    SessionResponse,
    SignupRequest,
    SignupResponse,
)
from guardian.security.deps import get_current_user, get_password_hasher, get_token_signer
from guardian.security.jwt_tokens import TokenSigner
from guardian.security.passwords import PasswordHasher
from guardian.services import accounts

router = APIRouter()


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the HTTP-only session cookie with configured attributes."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path=settings.session_cookie_path,
    )


def _public_user(user: User) -> PublicUser:
    return PublicUser(id=user.id, email=user.email, display_name=user.public_name)


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> SignupResponse:
    user = accounts.register_user(db, payload, hasher, settings)

    _set_session_cookie(response, signer.issue(user.id, user.email), settings)

    return SignupResponse(message="User registered successfully", user=_public_user(user))


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> LoginResponse:
    user = accounts.authenticate(db, payload, hasher, settings)

    _set_session_cookie(response, signer.issue(user.id, user.email), settings)

    return LoginResponse(
        message="Login successful",
        user=LoginUser(id=user.id, email=user.email, display_name=user.public_name, role=user.role),
    )


@router.get("/session", response_model=SessionResponse)
def session(user: User = Depends(get_current_user)) -> SessionResponse:
    return SessionResponse(user=_public_user(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)) -> MessageResponse:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path=settings.session_cookie_path,
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite=settings.session_cookie_samesite,
    )
    return MessageResponse(message="Logged out")
