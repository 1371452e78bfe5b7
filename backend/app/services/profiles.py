# app/services/profiles.py
"""
Profile operations.

Every write re-reads the profile row inside a transaction with
``select_for_update`` so that read-modify-write of the nested JSON lists is
serialized per profile.
"""
import logging
from typing import Callable

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.embedded import EmbeddedList
from app.core.errors import ConflictError, NotFoundError
from app.models.profile import Profile
from app.models.user import User
from app.schemas.profile import LearningLanguageIn, OptionalInfoIn, RequiredProfileIn, TravelPlanIn

logger = logging.getLogger("uvicorn.error")

ADD_REQUIRED_INFO = (
    "You have not added the required information yet. "
    "See Account settings to get started with your profile."
)
USERNAME_TAKEN = "That username has already been taken."
PROFILE_CHANGED = "Your profile was changed by another request. Please try again."


def _no_profile() -> NotFoundError:
    return NotFoundError(ADD_REQUIRED_INFO, key="add_required_info")


def learning_languages(profile: Profile) -> EmbeddedList:
    return EmbeddedList(
        profile.learning_languages,
        missing=NotFoundError("That does not exist.", key="language_not_found"),
    )


def travel_plans(profile: Profile) -> EmbeddedList:
    return EmbeddedList(
        profile.travel_plans,
        missing=NotFoundError("That does not exist.", key="travel_not_found"),
    )


# ------------------------------------------------------------------------------
# Reads
# ------------------------------------------------------------------------------
async def list_profiles() -> list[Profile]:
    profiles = await Profile.all().select_related("user").order_by("-created_at")
    if not profiles:
        raise NotFoundError("There are no profiles.", key="no_profiles")
    return profiles


async def get_by_username(username: str) -> Profile:
    profile = await Profile.filter(username=username.lower()).select_related("user").first()
    if not profile:
        raise NotFoundError("That profile does not exist.", key="profile_not_found")
    return profile


async def get_for_user(user: User) -> Profile:
    profile = await Profile.filter(user_id=user.id).select_related("user").first()
    if not profile:
        raise NotFoundError("That profile does not exist.", key="profile_not_found")
    return profile


# ------------------------------------------------------------------------------
# Writes
# ------------------------------------------------------------------------------
async def save_required(user: User, body: RequiredProfileIn) -> Profile:
    """
    Create the profile, or update its required fields if it already exists.

    The username must not belong to another profile; keeping one's own
    username is not a conflict.
    """
    fields = body.model_dump()
    try:
        async with in_transaction() as conn:
            profile = await Profile.filter(user_id=user.id).using_db(conn).select_for_update().first()
            taken = await (
                Profile.filter(username=body.username).exclude(user_id=user.id).using_db(conn).exists()
            )
            if taken:
                raise ConflictError(USERNAME_TAKEN, key="profile_required_error")
            if profile:
                profile.update_from_dict(fields)
                await profile.save(using_db=conn)
            else:
                profile = await Profile.create(using_db=conn, user=user, **fields)
                logger.info("[profiles] created profile username=%s user=%s", profile.username, user.id)
    except IntegrityError:
        # Either the username was claimed meanwhile, or a concurrent first
        # submission already created this user's profile
        if await Profile.filter(username=body.username).exclude(user_id=user.id).exists():
            raise ConflictError(USERNAME_TAKEN, key="profile_required_error")
        raise ConflictError(PROFILE_CHANGED, key="profile_required_error")
    await profile.fetch_related("user")
    return profile


async def _mutate(user: User, change: Callable[[Profile], None]) -> Profile:
    """Lock the user's profile, apply ``change`` and persist it."""
    async with in_transaction() as conn:
        profile = await Profile.filter(user_id=user.id).using_db(conn).select_for_update().first()
        if not profile:
            raise _no_profile()
        change(profile)
        await profile.save(using_db=conn)
    await profile.fetch_related("user")
    return profile


async def merge_optional_info(user: User, body: OptionalInfoIn) -> Profile:
    """Apply the three-way optional-field update (absent / clear / set)."""

    def apply(profile: Profile) -> None:
        for name, value in body.changes().items():
            setattr(profile, name, value)
        social = dict(profile.social or {})
        for name, value in body.social_changes().items():
            if value is None:
                social.pop(name, None)
            else:
                social[name] = value
        profile.social = social

    return await _mutate(user, apply)


async def add_learning_language(user: User, body: LearningLanguageIn) -> Profile:
    def apply(profile: Profile) -> None:
        langs = learning_languages(profile)
        langs.ensure_absent(
            lambda entry: str(entry.get("language", "")).lower() == body.language,
            ConflictError("You have already added that language before.", key="language_already_added"),
        )
        langs.append({"language": body.language, "level": body.level})
        profile.learning_languages = langs.to_list()

    return await _mutate(user, apply)


async def remove_learning_language(user: User, entry_id: str) -> Profile:
    def apply(profile: Profile) -> None:
        langs = learning_languages(profile)
        langs.remove(entry_id)
        profile.learning_languages = langs.to_list()

    return await _mutate(user, apply)


async def add_travel_plan(user: User, body: TravelPlanIn) -> Profile:
    def apply(profile: Profile) -> None:
        plans = travel_plans(profile)
        plans.prepend(body.to_entry())
        profile.travel_plans = plans.to_list()

    return await _mutate(user, apply)


async def edit_travel_plan(user: User, entry_id: str, body: TravelPlanIn) -> Profile:
    def apply(profile: Profile) -> None:
        plans = travel_plans(profile)
        plans.replace(entry_id, body.to_entry())
        profile.travel_plans = plans.to_list()

    return await _mutate(user, apply)


async def remove_travel_plan(user: User, entry_id: str) -> Profile:
    def apply(profile: Profile) -> None:
        plans = travel_plans(profile)
        plans.remove(entry_id)
        profile.travel_plans = plans.to_list()

    return await _mutate(user, apply)
