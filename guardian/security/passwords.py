from passlib.context import CryptContext
from passlib.exc import PasswordSizeError

from guardian.core.settings import Settings


class PasswordHasher:
    """Salted pbkdf2_sha256 hashing; the salt is embedded in each hash string."""

    def __init__(self, rounds: int) -> None:
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.password_hash_rounds)

    def hash(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(plain_password, hashed_password)
        except PasswordSizeError:
            return False

    def dummy_verify(self) -> None:
        # Same cost as a real verify, used when the email is unknown
        self._context.dummy_verify()
