# app/schemas/post.py
"""
Pydantic schemas for posts and comments.
"""
from pydantic import Field

from .base import StrictBody

__all__ = ["PostIn", "CommentIn"]


class PostIn(StrictBody):
    text: str = Field(min_length=2, max_length=1000)


class CommentIn(StrictBody):
    text: str = Field(min_length=1, max_length=300)
