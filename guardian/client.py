"""
Async client-side view of the auth API.

Keeps the caller's idea of "who is signed in" in step with the server:

    async with httpx.AsyncClient(base_url="https://guardian.example") as http:
        auth = AuthClient(http)
        await auth.check()          # status leaves UNKNOWN here
        if auth.user is None:
            await auth.sign_in("a@x.com", "secret1")

Identity is never available synchronously: until the first ``check()`` or
sign-in completes, ``status`` is ``UNKNOWN`` and ``loading`` is true.
"""

import enum
from typing import Optional

import httpx

from guardian.schemas.auth import LoginUser, PublicUser


class AuthStatus(str, enum.Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class AuthClientError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or response.reason_phrase
    except ValueError:
        return response.reason_phrase


class AuthClient:
    def __init__(self, http: httpx.AsyncClient, cookie_name: str = "auth-token") -> None:
        # The session cookie lives in the httpx client's cookie jar
        self._http = http
        self._cookie_name = cookie_name
        self._user: Optional[PublicUser] = None
        self._status = AuthStatus.UNKNOWN
        self._pending = 0

    @property
    def user(self) -> Optional[PublicUser]:
        return self._user

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is AuthStatus.UNKNOWN or self._pending > 0

    def _set_user(self, user: Optional[PublicUser]) -> None:
        self._user = user
        self._status = AuthStatus.AUTHENTICATED if user else AuthStatus.ANONYMOUS

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        self._pending += 1
        try:
            return await self._http.request(method, url, **kwargs)
        finally:
            self._pending -= 1

    async def check(self) -> Optional[PublicUser]:
        """Re-run session verification and update local state."""
        response = await self._request("GET", "/session")
        if response.status_code == 200:
            self._set_user(PublicUser.model_validate(response.json()["user"]))
        elif response.status_code in (401, 404):
            self._set_user(None)
        else:
            raise AuthClientError(response.status_code, _error_message(response))
        return self._user

    async def sign_in(self, email: str, password: str) -> LoginUser:
        response = await self._request("POST", "/login", json={"email": email, "password": password})
        if response.status_code != 200:
            self._set_user(None)
            raise AuthClientError(response.status_code, _error_message(response))
        user = LoginUser.model_validate(response.json()["user"])
        self._set_user(user)
        return user

    async def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> PublicUser:
        body = {"email": email, "password": password}
        if display_name is not None:
            body["displayName"] = display_name
        response = await self._request("POST", "/signup", json=body)
        if response.status_code != 201:
            raise AuthClientError(response.status_code, _error_message(response))
        user = PublicUser.model_validate(response.json()["user"])
        self._set_user(user)
        return user

    async def sign_out(self) -> None:
        try:
            response = await self._request("POST", "/logout")
            if response.status_code != 200:
                raise AuthClientError(response.status_code, _error_message(response))
        finally:
            # Only the session cookie; other cookies in the jar belong to the caller
            self._http.cookies.delete(self._cookie_name)
            self._set_user(None)
