# app/core/db.py
"""
Database configuration and initialization module.
Handles Tortoise ORM setup and database connection lifecycle.
"""
import logging
from tortoise import Tortoise

from app.config import settings

logger = logging.getLogger("uvicorn.error")

# Tortoise ORM configuration dictionary
TORTOISE_ORM = {
    "connections": {"default": settings.database_url},
    "apps": {
        "models": {
            "models": [
                "app.models.user",      # User model (credential store)
                "app.models.profile",   # Profile model with nested collections
                "app.models.post",      # Post model with likes and comments
            ],
            "default_connection": "default",
        },
    },
}


async def init_db(generate_schemas: bool = settings.generate_schemas):
    """
    Initialize Tortoise ORM database connection.

    Called during application startup. There is no migration tooling, so
    missing tables are created in place when ``generate_schemas`` is set;
    ``safe=True`` leaves existing tables untouched.
    """
    await Tortoise.init(config=TORTOISE_ORM)
    if generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    logger.info("[db] connected: %s", TORTOISE_ORM["connections"]["default"].split("@")[-1])


async def close_db():
    """Close all database connections on application shutdown."""
    await Tortoise.close_connections()
