import httpx
import pytest

from guardian.client import AuthClient, AuthClientError, AuthStatus
from guardian.main import app


pytestmark = pytest.mark.anyio


def _http() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


async def test_starts_unknown_then_anonymous():
    async with _http() as http:
        auth = AuthClient(http)
        assert auth.status is AuthStatus.UNKNOWN
        assert auth.loading
        assert auth.user is None

        assert await auth.check() is None
        assert auth.status is AuthStatus.ANONYMOUS
        assert not auth.loading


async def test_sign_up_then_check_and_sign_out():
    async with _http() as http:
        auth = AuthClient(http)
        user = await auth.sign_up("A@x.com", "secret1", display_name="Trekker")
        assert user.email == "a@x.com"
        assert user.display_name == "Trekker"
        assert auth.status is AuthStatus.AUTHENTICATED

        checked = await auth.check()
        assert checked.id == user.id

        await auth.sign_out()
        assert auth.user is None
        assert auth.status is AuthStatus.ANONYMOUS
        assert await auth.check() is None


async def test_sign_in_failure_leaves_client_anonymous():
    async with _http() as http:
        auth = AuthClient(http)
        await auth.sign_up("a@x.com", "secret1")
        await auth.sign_out()

        with pytest.raises(AuthClientError) as exc_info:
            await auth.sign_in("a@x.com", "wrong-pass")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid credentials"
        assert auth.status is AuthStatus.ANONYMOUS

        user = await auth.sign_in("a@x.com", "secret1")
        assert user.email == "a@x.com"
        assert (await auth.check()).email == "a@x.com"


async def test_duplicate_sign_up_raises():
    async with _http() as http:
        await AuthClient(http).sign_up("a@x.com", "secret1")

    async with _http() as http:
        with pytest.raises(AuthClientError) as exc_info:
            await AuthClient(http).sign_up("a@x.com", "secret1")
        assert exc_info.value.message == "User already exists"


async def test_sign_in_keeps_role():
    async with _http() as http:
        auth = AuthClient(http)
        await auth.sign_up("a@x.com", "secret1")
        await auth.sign_out()

        user = await auth.sign_in("a@x.com", "secret1")
        assert user.role == "user"
        assert auth.user.role == "user"


async def test_sign_out_keeps_unrelated_cookies():
    async with _http() as http:
        http.cookies.set("trail-prefs", "monsoon")
        auth = AuthClient(http)
        await auth.sign_up("a@x.com", "secret1")
        assert http.cookies.get("auth-token")

        await auth.sign_out()
        assert http.cookies.get("auth-token") is None
        assert http.cookies.get("trail-prefs") == "monsoon"
