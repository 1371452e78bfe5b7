# app/services/accounts.py
"""
Account operations: registration, login and account deletion.
"""
import logging

from starlette.concurrency import run_in_threadpool
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.security import TokenService, hash_password, verify_password
from app.models.post import Post
from app.models.profile import Profile
from app.models.user import User
from app.schemas.auth import LoginIn, RegisterIn

logger = logging.getLogger("uvicorn.error")


async def register(body: RegisterIn) -> User:
    """
    Create a new account.

    Raises:
        ConflictError (register_error): Email already registered
        ValidationError (register_error): Passwords do not match
    """
    if await User.filter(email=body.email).exists():
        raise ConflictError("That user already exists.", key="register_error")
    if body.confirmpw != body.password:
        raise ValidationError("Passwords do not match.", key="register_error")

    password_hash = await run_in_threadpool(hash_password, body.password)
    try:
        user = await User.create(name=body.name, email=body.email, password_hash=password_hash)
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        raise ConflictError("That user already exists.", key="register_error")
    logger.info("[accounts] registered user id=%s", user.id)
    return user


async def login(body: LoginIn, tokens: TokenService) -> str:
    """
    Check credentials and issue a token.

    Returns:
        The signed token (without the ``Bearer`` prefix)

    Raises:
        NotFoundError (signin_error): Unknown email
        ValidationError (signin_error): Wrong password
    """
    user = await User.get_or_none(email=body.email)
    if not user:
        raise NotFoundError("That user doesn't exist", key="signin_error")
    if not await run_in_threadpool(verify_password, body.password, user.password_hash):
        raise ValidationError("Incorrect password", key="signin_error")
    return tokens.issue(user)


async def delete_account(user: User) -> None:
    """Remove the account together with its profile and posts."""
    async with in_transaction() as conn:
        await Profile.filter(user_id=user.id).using_db(conn).delete()
        await Post.filter(user_id=user.id).using_db(conn).delete()
        await User.filter(id=user.id).using_db(conn).delete()
    logger.info("[accounts] deleted user id=%s", user.id)
