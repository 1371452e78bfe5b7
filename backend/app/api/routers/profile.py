# app/api/routers/profile.py
from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_current_user
from app.models.profile import Profile
from app.models.user import User
from app.schemas import (
    LearningLanguageIn,
    OptionalInfoIn,
    RequiredProfileIn,
    TravelPlanIn,
    parse_body,
)
from app.services import accounts, profiles

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_to_dict(p: Profile) -> dict:
    """
    Convert a Profile (with ``user`` fetched) to the API response shape.
    The owning user is populated with its public name and creation date.
    """
    owner = p.user
    return {
        "id": str(p.id),
        "user": {
            "id": str(owner.id),
            "name": owner.name,
            "date": owner.created_at.isoformat() if owner.created_at else None,
        },
        "username": p.username,
        "birth_date": p.birth_date.isoformat(),
        "current_location": p.current_location,
        "gender": p.gender,
        "country": p.country,
        "hometown": p.hometown,
        "occupation": p.occupation,
        "bio": p.bio,
        "interests": p.interests or [],
        "fluent_languages": p.fluent_languages or [],
        "wishlist": p.wishlist or [],
        "countries_visited": p.countries_visited or [],
        "social": p.social or {},
        "learning_languages": p.learning_languages or [],
        "travel_plans": p.travel_plans or [],
        "date": p.created_at.isoformat() if p.created_at else None,
    }


# ===== Reads =====
@router.get("/all")
async def list_profiles():
    """All profiles (public). 404 ``no_profiles`` when there are none."""
    return [_profile_to_dict(p) for p in await profiles.list_profiles()]


@router.get("/username/{username}")
async def get_profile_by_username(username: str, user: User = Depends(get_current_user)):
    """Profile by username. 404 ``profile_not_found``."""
    return _profile_to_dict(await profiles.get_by_username(username))


@router.get("")
async def get_own_profile(user: User = Depends(get_current_user)):
    """The authenticated user's profile. 404 ``profile_not_found``."""
    return _profile_to_dict(await profiles.get_for_user(user))


# ===== Required / optional information =====
@router.post("/required")
async def save_required_info(payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """
    Create the profile or update its required fields.

    Body:
        - username: str (3-50, whitespace removed, stored lowercase, unique)
        - birth_date: str (YYYY-MM-DD)
        - current_location: str (3-50)
        - gender: "Male" | "Female" | "Other"

    Errors (400, key ``profile_required_error``):
        invalid body, username owned by another profile
    """
    body = parse_body(RequiredProfileIn, payload, key="profile_required_error")
    return _profile_to_dict(await profiles.save_required(user, body))


@router.post("/info")
async def save_optional_info(payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """
    Merge optional fields into the profile.

    For each field: absent or null leaves it unchanged, "" clears it, any other
    value sets it. List fields take a JSON list or a comma separated string.

    Errors:
        400 ``input_error``, 404 ``add_required_info`` (no profile yet)
    """
    body = parse_body(OptionalInfoIn, payload)
    return _profile_to_dict(await profiles.merge_optional_info(user, body))


# ===== Learning languages =====
@router.post("/info/learning_languages")
async def add_learning_language(payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """Add a language; 400 ``language_already_added`` if already listed (any case)."""
    body = parse_body(LearningLanguageIn, payload)
    return _profile_to_dict(await profiles.add_learning_language(user, body))


@router.delete("/info/learning_languages/{entry_id}")
async def remove_learning_language(entry_id: str, user: User = Depends(get_current_user)):
    """Remove a language by id; 404 ``language_not_found``."""
    return _profile_to_dict(await profiles.remove_learning_language(user, entry_id))


# ===== Travel plans =====
@router.post("/info/travel_plans")
async def add_travel_plan(payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """Add a travel plan at the front of the list."""
    body = parse_body(TravelPlanIn, payload)
    return _profile_to_dict(await profiles.add_travel_plan(user, body))


@router.put("/info/travel_plans/{entry_id}")
async def edit_travel_plan(entry_id: str, payload: Any = Body(default=None), user: User = Depends(get_current_user)):
    """Replace a travel plan's fields, keeping its id and position; 404 ``travel_not_found``."""
    body = parse_body(TravelPlanIn, payload)
    return _profile_to_dict(await profiles.edit_travel_plan(user, entry_id, body))


@router.delete("/info/travel_plans/{entry_id}")
async def remove_travel_plan(entry_id: str, user: User = Depends(get_current_user)):
    """Remove a travel plan by id; 404 ``travel_not_found``."""
    return _profile_to_dict(await profiles.remove_travel_plan(user, entry_id))


# ===== Account =====
@router.delete("")
async def delete_account(user: User = Depends(get_current_user)):
    """Delete the authenticated account together with its profile and posts."""
    await accounts.delete_account(user)
    return {"success": True}
