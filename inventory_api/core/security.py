"""
JWT token creation / verification and password hashing (bcrypt).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from inventory_api.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


# ── Passwords ───────────────────────────────────────────────────────
def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str | None, hashed: str | None) -> bool:
    """Constant-time check; any malformed input counts as a mismatch."""
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


# ── JWT tokens ──────────────────────────────────────────────────────
@dataclass(frozen=True)
class TokenClaims:
    id: int
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies signed access tokens with a single static secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(hours=1),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_delta = expires_delta

    def issue(self, user_id: int, username: str) -> str:
        now = datetime.now(timezone.utc)
        return jwt.encode(
            {
                "id": user_id,
                "username": username,
                "iat": int(now.timestamp()),
                "exp": int((now + self._expires_delta).timestamp()),
            },
            self._secret,
            algorithm=self._algorithm,
        )

    def verify(self, token: str) -> TokenClaims | None:
        """Return the claims if *token* is authentic and unexpired, else ``None``.

        Forged, malformed and expired tokens are deliberately indistinguishable.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None

        user_id = payload.get("id")
        username = payload.get("username")
        exp = payload.get("exp")
        if not isinstance(user_id, int) or not isinstance(username, str) or exp is None:
            return None
        return TokenClaims(
            id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(payload.get("iat", exp), timezone.utc),
            expires_at=datetime.fromtimestamp(exp, timezone.utc),
        )
