import os

# Must be set before guardian is imported: settings and the engine are built on import
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_guardian.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")

import pytest
from fastapi.testclient import TestClient

from guardian.db.session import Base, engine
from guardian.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def anyio_backend():
    return "asyncio"


def signup(client: TestClient, email: str, password: str = "secret1", **extra):
    r = client.post("/signup", json={"email": email, "password": password, **extra})
    assert r.status_code == 201, r.text
    return r.json()["user"]


def promote_to_admin(user_id: int) -> None:
    with engine.begin() as conn:
        conn.exec_driver_sql("UPDATE users SET role='admin' WHERE id=?", (user_id,))


@pytest.fixture
def admin_client() -> TestClient:
    """A client holding a session cookie for an admin account."""
    admin = TestClient(app)
    user = signup(admin, "ranger@example.com", "ranger-pass")
    promote_to_admin(user["id"])
    return admin
