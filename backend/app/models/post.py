# app/models/post.py
"""
Database model for posts.
Author name / username / gender are copied from the profile when the post is
created and are not kept in sync with later profile edits.
"""
import uuid
from tortoise import fields, models


class Post(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="posts",
        on_delete=fields.CASCADE,
    )  # Author; posts are removed with the account
    text = fields.CharField(max_length=1000)
    name = fields.CharField(max_length=50)
    username = fields.CharField(max_length=50)
    gender = fields.CharField(max_length=8)

    likes = fields.JSONField(default=list)     # [{id, user}]
    comments = fields.JSONField(default=list)  # [{id, user, name, username, text, date}], newest first

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "posts"
