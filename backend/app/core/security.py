# app/core/security.py
"""
Security module for authentication.
Handles password hashing and signed, time-limited identity tokens.
"""
import time
import logging
import jwt  # PyJWT
from passlib.context import CryptContext

logger = logging.getLogger("uvicorn.error")

# Password hashing context
# bcrypt with cost factor 10; every hash embeds its own random salt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=10,
)

# Token configuration
TOKEN_TTL_SECONDS = 7200  # Fixed validity window (2 hours from issuance)
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)

    Note: bcrypt is CPU bound; async callers should run this in a threadpool.
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain, hashed)


class TokenService:
    """
    Issues and verifies signed identity tokens.

    The signing secret is handed in once at startup (see ``app.main``) and is
    read-only afterwards.

    Token payload:
        - id: User id
        - name, email: Identity claims
        - date: Account creation timestamp (ISO format)
        - iat: Issued at (seconds since epoch)
        - exp: iat + ttl_seconds
    """

    def __init__(self, secret: str, ttl_seconds: int = TOKEN_TTL_SECONDS, algorithm: str = JWT_ALG):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    def issue(self, identity, now: int | None = None) -> str:
        """
        Create a token for ``identity`` (any object with id, name, email and
        created_at attributes, normally a ``User``).

        Args:
            identity: The user the token speaks for
            now: Issue time in epoch seconds (defaults to the current time)
        """
        issued_at = int(time.time()) if now is None else int(now)
        created_at = getattr(identity, "created_at", None)
        payload = {
            "id": str(identity.id),
            "name": identity.name,
            "email": identity.email,
            "date": created_at.isoformat() if created_at else None,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> dict | None:
        """
        Check signature and expiry.

        Returns:
            The embedded claims, or None when the token is missing, malformed,
            badly signed or expired. Never raises for a bad token.
        """
        if not token:
            return None
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "id"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("[auth] rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.info("[auth] rejected invalid token: %s", e)
            return None
