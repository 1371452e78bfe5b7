# app/api/deps.py
import logging
import uuid

from fastapi import Depends, Header, Request

from app.core.errors import AuthenticationError
from app.core.security import TokenService
from app.models.user import User

logger = logging.getLogger("uvicorn.error")


def get_token_service(request: Request) -> TokenService:
    """The token service built at startup (see ``app.main``)."""
    return request.app.state.tokens


def bearer_token(authorization: str | None) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    FastAPI dependency guarding every private route.

    The token is accepted only as ``Authorization: Bearer <token>``.

    Returns:
        User: The authenticated user (also stored on ``request.state.user``)

    Raises:
        AuthenticationError (401): No bearer token (AUTH_REQUIRED)
        AuthenticationError (401): Bad signature, malformed or expired (AUTH_INVALID_TOKEN)
        AuthenticationError (401): Token valid but user no longer exists (AUTH_USER_NOT_FOUND)

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"id": str(user.id)}
    """
    token = bearer_token(authorization)
    if not token:
        raise AuthenticationError("AUTH_REQUIRED")

    claims = tokens.verify(token)
    if claims is None:
        raise AuthenticationError("AUTH_INVALID_TOKEN")

    try:
        user_id = uuid.UUID(str(claims["id"]))
    except ValueError:
        raise AuthenticationError("AUTH_INVALID_TOKEN")

    user = await User.get_or_none(id=user_id)
    if not user:
        logger.warning("[auth] token for missing user id=%s", claims["id"])
        raise AuthenticationError("AUTH_USER_NOT_FOUND")
    request.state.user = user
    return user
