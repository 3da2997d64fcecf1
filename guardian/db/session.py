from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from guardian.core.settings import get_settings


class Base(DeclarativeBase):
    pass


_database_url = get_settings().database_url

engine = create_engine(
    _database_url,
    connect_args={"check_same_thread": False} if _database_url.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
