from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
from webquiz.core.config import settings


class PasswordHasher:
    """Opaque hash/verify capability; the scheme is whatever passlib is configured with."""

    def __init__(self, schemes: list[str] | None = None):
        self._context = CryptContext(schemes=schemes or ["bcrypt"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)


password_hasher = PasswordHasher()


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": user_id, "exp": exp}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_subject(token: str) -> str:
    """Return the user id a token was issued for.

    Raises JWTError for a bad signature, an expired token or a token without a subject.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    sub = payload.get("sub")
    if not sub:
        raise JWTError("No subject in token")
    return sub
