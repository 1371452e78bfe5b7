# app/services/posts.py
"""
Post operations: create, delete, like / unlike, comment / delete comment.

Order of checks for every mutation by id: the post exists, then the nested
entry exists, then the caller owns it. Writes run inside a transaction on a
``select_for_update`` re-read of the post row.
"""
import datetime as dt
import logging
import uuid
from typing import Callable

from tortoise.transactions import in_transaction

from app.core.embedded import EmbeddedList
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.permissions import ensure_owner
from app.models.post import Post
from app.models.profile import Profile
from app.models.user import User
from app.schemas.post import CommentIn, PostIn

logger = logging.getLogger("uvicorn.error")


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def parse_post_id(post_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(post_id))
    except ValueError:
        raise ValidationError("The post ID you provided is invalid.", key="invalid_id")


def likes(post: Post) -> EmbeddedList:
    return EmbeddedList(post.likes)


def comments(post: Post) -> EmbeddedList:
    return EmbeddedList(
        post.comments,
        missing=NotFoundError("That comment does not exist.", key="comment_not_found"),
    )


async def list_posts() -> list[Post]:
    posts = await Post.all().order_by("-created_at")
    if not posts:
        raise NotFoundError("There are no posts.", key="no_posts")
    return posts


async def create_post(user: User, body: PostIn) -> Post:
    """Create a post; author name/username/gender are copied at this moment."""
    profile = await Profile.get_or_none(user_id=user.id)
    if not profile:
        raise NotFoundError("You need a profile to create posts.", key="no_profile", status_code=401)
    post = await Post.create(
        user=user,
        text=body.text,
        name=user.name,
        username=profile.username,
        gender=profile.gender,
    )
    logger.info("[posts] created post id=%s user=%s", post.id, user.id)
    return post


async def _mutate(post_id: str, change: Callable[[Post], None]) -> Post:
    """Lock the post, apply ``change`` and persist it."""
    pid = parse_post_id(post_id)
    async with in_transaction() as conn:
        post = await Post.filter(id=pid).using_db(conn).select_for_update().first()
        if not post:
            raise NotFoundError("That post does not exist.", key="post_not_found")
        change(post)
        await post.save(using_db=conn)
    return post


async def delete_post(user: User, post_id: str) -> None:
    pid = parse_post_id(post_id)
    async with in_transaction() as conn:
        post = await Post.filter(id=pid).using_db(conn).select_for_update().first()
        if not post:
            raise NotFoundError("That post does not exist.", key="post_not_found")
        ensure_owner(post.user_id, user, "You are not authorized to delete this post.")
        await post.delete(using_db=conn)
    logger.info("[posts] deleted post id=%s", pid)


async def like(user: User, post_id: str) -> Post:
    uid = str(user.id)

    def apply(post: Post) -> None:
        entries = likes(post)
        entries.ensure_absent(
            lambda entry: entry.get("user") == uid,
            ConflictError("You have already liked this post", key="already_liked", status_code=401),
        )
        entries.append({"user": uid})
        post.likes = entries.to_list()

    return await _mutate(post_id, apply)


async def unlike(user: User, post_id: str) -> Post:
    uid = str(user.id)

    def apply(post: Post) -> None:
        entries = likes(post)
        mine = entries.find(lambda entry: entry.get("user") == uid)
        if mine is None:
            raise NotFoundError("You have not liked this post.", key="not_liked", status_code=400)
        entries.remove(mine["id"])
        post.likes = entries.to_list()

    return await _mutate(post_id, apply)


async def add_comment(user: User, post_id: str, body: CommentIn) -> Post:
    """Insert a comment at the front of the post's comment list."""
    pid = parse_post_id(post_id)
    if not await Post.filter(id=pid).exists():
        raise NotFoundError("That post does not exist.", key="post_not_found")
    profile = await Profile.get_or_none(user_id=user.id)
    if not profile:
        raise NotFoundError("Please make a profile first.", key="no_profile")

    def apply(post: Post) -> None:
        entries = comments(post)
        entries.prepend({
            "user": str(user.id),
            "name": user.name,
            "username": profile.username,
            "text": body.text,
            "date": utc_now().isoformat(),
        })
        post.comments = entries.to_list()

    return await _mutate(post_id, apply)


async def delete_comment(user: User, post_id: str, comment_id: str) -> Post:
    """Remove a comment; only its author may do so."""

    def apply(post: Post) -> None:
        entries = comments(post)
        comment = entries.get(comment_id)
        ensure_owner(comment.get("user"), user, "You are not authorized to delete this comment.")
        entries.remove(comment_id)
        post.comments = entries.to_list()

    return await _mutate(post_id, apply)
