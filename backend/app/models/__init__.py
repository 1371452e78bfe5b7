# app/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Account and authentication model
- Profile: One-to-one profile with nested collections
- Post: Post with nested likes and comments
"""
from .user import User
from .profile import Profile
from .post import Post
