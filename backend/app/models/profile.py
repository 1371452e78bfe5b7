# app/models/profile.py
"""
Database model for profiles.
One profile per user: required fields, optional enrichment fields and the
nested learning-language / travel-plan collections.
"""
import uuid
from tortoise import fields, models

GENDERS = ("Male", "Female", "Other")
LANGUAGE_LEVELS = ("Beginner", "Elementary", "Intermediate", "Upper Intermediate", "Advanced", "Expert")
SOCIAL_FIELDS = ("website", "youtube", "twitter", "facebook", "linkedin", "instagram")


class Profile(models.Model):
    """
    Profile database model.

    Nested collections are JSON lists of dicts, each entry with a generated
    ``id`` (see ``app.core.embedded.EmbeddedList``):
    - learning_languages: {id, language, level}
    - travel_plans: {id, destination, arrival_date, departure_date,
      number_of_travelers, description}, newest first
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.OneToOneField(
        "models.User",
        related_name="profile",
        on_delete=fields.CASCADE,
    )  # Owning account; profile is removed with the account

    # Required information
    username = fields.CharField(max_length=50, unique=True, index=True)  # Lowercase public handle
    birth_date = fields.DateField()
    current_location = fields.CharField(max_length=50)
    gender = fields.CharField(max_length=8)  # One of GENDERS

    # Optional information
    country = fields.CharField(max_length=100, null=True)
    hometown = fields.CharField(max_length=50, null=True)
    occupation = fields.CharField(max_length=50, null=True)
    bio = fields.TextField(null=True)
    interests = fields.JSONField(default=list)
    fluent_languages = fields.JSONField(default=list)
    wishlist = fields.JSONField(default=list)
    countries_visited = fields.JSONField(default=list)
    social = fields.JSONField(default=dict)  # Keys from SOCIAL_FIELDS

    # Nested collections
    learning_languages = fields.JSONField(default=list)
    travel_plans = fields.JSONField(default=list)

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "profiles"
