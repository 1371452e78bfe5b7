# app/core/permissions.py
"""Ownership checks applied after an entity is known to exist."""
from app.core.errors import NotAuthorizedError


def is_owner(owner_id, user) -> bool:
    return str(owner_id) == str(user.id)


def ensure_owner(owner_id, user, message: str = "You are not authorized to do that.") -> None:
    """
    Raise NotAuthorizedError unless ``user`` is the recorded owner.

    Args:
        owner_id: Id stored on the target (post.user_id, comment["user"], ...)
        user: Authenticated user
        message: Message for the ``not_authorized`` body
    """
    if not is_owner(owner_id, user):
        raise NotAuthorizedError(message)
