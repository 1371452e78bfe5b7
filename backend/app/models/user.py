# app/models/user.py
"""
Database model for users.
Represents an account: identity claims plus the password hash.
"""
import uuid
from tortoise import fields, models


class User(models.Model):
    """
    User database model (credential store).

    Relationships:
    - Has at most one Profile (one-to-one, via related_name="profile")
    - Has many Posts (one-to-many, via related_name="posts")

    Security:
    - Password is stored as a bcrypt hash (never store plain text passwords)
    - Email is stored lowercase and must be unique
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=50)  # Display name
    email = fields.CharField(max_length=50, unique=True, index=True)  # Login email, always lowercase
    password_hash = fields.CharField(max_length=255)  # bcrypt hash
    created_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"
