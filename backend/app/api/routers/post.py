# app/api/routers/post.py
from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_current_user
from app.models.post import Post
from app.models.user import User
from app.schemas import CommentIn, PostIn, parse_body
from app.services import posts

router = APIRouter(prefix="/post", tags=["post"])


def _post_to_dict(p: Post) -> dict:
    return {
        "id": str(p.id),
        "user": str(p.user_id),
        "text": p.text,
        "name": p.name,
        "username": p.username,
        "gender": p.gender,
        "likes": p.likes or [],
        "comments": p.comments or [],
        "date": p.created_at.isoformat() if p.created_at else None,
    }


@router.get("/all")
async def list_posts(user: User = Depends(get_current_user)):
    """All posts, newest first. 404 ``no_posts`` when there are none."""
    return [_post_to_dict(p) for p in await posts.list_posts()]


@router.post("")
async def create_post(payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """
    Create a post as the authenticated user.

    Body:
        - text: str (2-1000)

    Errors:
        400 ``input_error``, 401 ``no_profile`` (a profile is required to post)
    """
    body = parse_body(PostIn, payload)
    return _post_to_dict(await posts.create_post(user, body))


@router.delete("/{post_id}")
async def delete_post(post_id: str, user: User = Depends(get_current_user)):
    """
    Delete one of the caller's posts.

    Errors:
        400 ``invalid_id``, 404 ``post_not_found``, 401 ``not_authorized``
    """
    await posts.delete_post(user, post_id)
    return {"success": True}


@router.post("/like/{post_id}")
async def like_post(post_id: str, user: User = Depends(get_current_user)):
    """Like a post; 401 ``already_liked`` on a second like."""
    return _post_to_dict(await posts.like(user, post_id))


@router.delete("/unlike/{post_id}")
async def unlike_post(post_id: str, user: User = Depends(get_current_user)):
    """Remove the caller's like; 400 ``not_liked`` if there is none."""
    return _post_to_dict(await posts.unlike(user, post_id))


@router.post("/comment/{post_id}")
async def comment_post(post_id: str, payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """
    Comment on a post (newest comment first).

    Errors:
        400 ``input_error``, 404 ``post_not_found``, 404 ``no_profile``
    """
    body = parse_body(CommentIn, payload)
    return _post_to_dict(await posts.add_comment(user, post_id, body))


@router.delete("/comment/{post_id}/{comment_id}")
async def delete_comment(post_id: str, comment_id: str, user: User = Depends(get_current_user)):
    """
    Delete one of the caller's comments.

    Errors:
        404 ``post_not_found`` / ``comment_not_found``, 401 ``not_authorized``
    """
    return _post_to_dict(await posts.delete_comment(user, post_id, comment_id))
