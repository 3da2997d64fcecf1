from typing import Optional

from fastapi import FastAPI

from guardian.core.logger import logger
from guardian.core.settings import Settings, get_settings
from guardian.db.session import Base, SessionLocal, engine
from guardian.models.event import LoginEvent  # noqa: F401
from guardian.models.hazard import HazardReport  # noqa: F401
from guardian.models.user import User
from guardian.security.passwords import PasswordHasher


def seed_admin(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    if not settings.first_admin_email or not settings.first_admin_password:
        return

    email = settings.first_admin_email.strip().lower()
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == email).first():
            logger.info("Bootstrap admin %s already exists, skipping", email)
            return
        db.add(
            User(
                email=email,
                hashed_password=PasswordHasher.from_settings(settings).hash(settings.first_admin_password),
                display_name=email.split("@")[0],
                role="admin",
                is_active=True,
            )
        )
        db.commit()
        logger.info("Bootstrap admin %s created", email)
    finally:
        db.close()


def register_startup(app: FastAPI) -> None:
    @app.on_event("startup")
    def _create_tables() -> None:
        Base.metadata.create_all(bind=engine)
        seed_admin()
        logger.info("%s started", get_settings().app_name)
