# app/schemas/profile.py
"""
Pydantic schemas for profile endpoints.

``OptionalInfoIn`` is a three-way update: a key that is absent (or null)
leaves the stored value alone, an empty string clears it, anything else sets
it. ``changes()`` turns the request into the exact field assignments.
"""
import re
import datetime as dt
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, field_validator, model_validator

from app.models.profile import GENDERS, LANGUAGE_LEVELS, SOCIAL_FIELDS
from .base import BlankOrUrl, IsoDate, StrictBody, blank_or_length, split_list

__all__ = ["RequiredProfileIn", "OptionalInfoIn", "LearningLanguageIn", "TravelPlanIn"]

# "" clears the list; a comma separated string or a JSON list sets it
ListInput = Annotated[list[str] | Literal[""] | None, BeforeValidator(split_list)]

LIST_FIELDS = ("interests", "fluent_languages", "wishlist", "countries_visited")
LOWERCASE_LIST_FIELDS = ("interests", "fluent_languages")
SCALAR_FIELDS = ("country", "hometown", "occupation", "bio")


class RequiredProfileIn(StrictBody):
    """Required profile information (create-or-update)."""
    username: str = Field(min_length=3, max_length=50)
    birth_date: IsoDate
    current_location: str = Field(min_length=3, max_length=50)
    gender: Literal[GENDERS]

    @field_validator("username", mode="before")
    @classmethod
    def _compact_username(cls, value: Any) -> Any:
        # Usernames carry no whitespace and are stored lowercase
        if isinstance(value, str):
            return re.sub(r"\s", "", value).lower()
        return value


class OptionalInfoIn(StrictBody):
    """Optional profile information, merged into the existing profile."""
    country: Annotated[str | None, blank_or_length(1, 100)] = None
    hometown: Annotated[str | None, blank_or_length(2, 50)] = None
    occupation: Annotated[str | None, blank_or_length(2, 50)] = None
    bio: Annotated[str | None, blank_or_length(2, 1000)] = None

    interests: ListInput = None
    fluent_languages: ListInput = None
    wishlist: ListInput = None
    countries_visited: ListInput = None

    website: BlankOrUrl | None = None
    youtube: BlankOrUrl | None = None
    twitter: BlankOrUrl | None = None
    facebook: BlankOrUrl | None = None
    linkedin: BlankOrUrl | None = None
    instagram: BlankOrUrl | None = None

    def _provided(self):
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is not None:
                yield name, value

    def changes(self) -> dict[str, Any]:
        """Top-level profile assignments (cleared scalars -> None, cleared lists -> [])."""
        out: dict[str, Any] = {}
        for name, value in self._provided():
            if name in SCALAR_FIELDS:
                out[name] = value or None
            elif name in LIST_FIELDS:
                if value == "":
                    out[name] = []
                elif name in LOWERCASE_LIST_FIELDS:
                    out[name] = [v.lower() for v in value]
                else:
                    out[name] = list(value)
        return out

    def social_changes(self) -> dict[str, str | None]:
        """Per-link assignments; None means remove the link."""
        return {name: (value or None) for name, value in self._provided() if name in SOCIAL_FIELDS}


class LearningLanguageIn(StrictBody):
    language: str = Field(min_length=2, max_length=50)
    level: Literal[LANGUAGE_LEVELS] | Literal[""] = ""

    @field_validator("language")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.lower()


class TravelPlanIn(StrictBody):
    destination: str = Field(min_length=2, max_length=50)
    arrival_date: IsoDate
    departure_date: IsoDate
    number_of_travelers: int = Field(ge=1, le=100)
    description: str = Field(min_length=3, max_length=300)

    @model_validator(mode="after")
    def _departure_after_arrival(self):
        if self.departure_date < self.arrival_date:
            raise ValueError("departure_date must not be before arrival_date")
        return self

    def to_entry(self) -> dict[str, Any]:
        """Fields of the nested entry, dates as ISO strings for the JSON column."""
        data = self.model_dump()
        for key in ("arrival_date", "departure_date"):
            value: dt.date = data[key]
            data[key] = value.isoformat()
        return data
