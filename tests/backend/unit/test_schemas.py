"""
Unit tests for request validation.
Tests error keys, field-level messages and the three-way optional update.
"""
import datetime as dt

import pytest

from app.core.errors import ValidationError
from app.schemas import (
    LearningLanguageIn,
    LoginIn,
    OptionalInfoIn,
    RegisterIn,
    RequiredProfileIn,
    TravelPlanIn,
    parse_body,
)


def _plan(**overrides):
    body = {
        "destination": "Kyoto",
        "arrival_date": "2025-04-01",
        "departure_date": "2025-04-10",
        "number_of_travelers": 2,
        "description": "Cherry blossoms",
    }
    body.update(overrides)
    return body


class TestParseBody:
    def test_error_uses_given_key_and_names_the_field(self):
        with pytest.raises(ValidationError) as exc:
            parse_body(RegisterIn, {"name": "Al", "email": "a@x.com", "password": "secret1", "confirmpw": "secret1"},
                       key="register_error")
        body = exc.value.to_body()
        assert list(body) == ["register_error"]
        assert body["register_error"].startswith("name:")
        assert exc.value.status_code == 400

    def test_non_object_body_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            parse_body(LoginIn, ["a"], key="signin_error")
        assert "signin_error" in exc.value.to_body()

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ValidationError):
            parse_body(LoginIn, {"email": "a@x.com", "password": "secret1", "admin": True})

    def test_email_is_lowercased(self):
        body = parse_body(LoginIn, {"email": "Alice@Example.COM", "password": "secret1"})
        assert body.email == "alice@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc:
            parse_body(LoginIn, {"email": "nope", "password": "secret1"}, key="signin_error")
        assert exc.value.to_body()["signin_error"].startswith("email:")


class TestRequiredProfile:
    def test_username_whitespace_removed_and_lowercased(self):
        body = RequiredProfileIn.model_validate({
            "username": " Alice Smith ",
            "birth_date": "1990-01-31",
            "current_location": "NYC",
            "gender": "Female",
        })
        assert body.username == "alicesmith"
        assert body.birth_date == dt.date(1990, 1, 31)

    @pytest.mark.parametrize("field,value", [
        ("gender", "Robot"),
        ("birth_date", "31/01/1990"),
        ("birth_date", 631152000),
        ("current_location", "NY"),
        ("username", "a b"),
    ])
    def test_rejects_bad_values(self, field, value):
        payload = {"username": "alice", "birth_date": "1990-01-31", "current_location": "NYC", "gender": "Female"}
        payload[field] = value
        with pytest.raises(ValidationError) as exc:
            parse_body(RequiredProfileIn, payload, key="profile_required_error")
        assert exc.value.to_body()["profile_required_error"].startswith(f"{field}:")


class TestOptionalInfo:
    def test_absent_fields_produce_no_changes(self):
        body = OptionalInfoIn.model_validate({})
        assert body.changes() == {}
        assert body.social_changes() == {}

    def test_null_is_treated_as_absent(self):
        body = OptionalInfoIn.model_validate({"bio": None, "interests": None, "website": None})
        assert body.changes() == {}
        assert body.social_changes() == {}

    def test_empty_string_clears(self):
        body = OptionalInfoIn.model_validate({"bio": "", "interests": "", "twitter": ""})
        assert body.changes() == {"bio": None, "interests": []}
        assert body.social_changes() == {"twitter": None}

    def test_values_are_set(self):
        body = OptionalInfoIn.model_validate({
            "country": "Portugal",
            "interests": "Hiking, Surfing,Food",
            "fluent_languages": ["English", "Portuguese"],
            "wishlist": "Iceland, Peru",
            "website": "https://example.com/me",
        })
        assert body.changes() == {
            "country": "Portugal",
            "interests": ["hiking", "surfing", "food"],
            "fluent_languages": ["english", "portuguese"],
            "wishlist": ["Iceland", "Peru"],
        }
        assert body.social_changes() == {"website": "https://example.com/me"}

    @pytest.mark.parametrize("field,value", [
        ("hometown", "X"),
        ("bio", "x" * 1001),
        ("website", "not a url"),
        ("interests", 5),
    ])
    def test_rejects_bad_values(self, field, value):
        with pytest.raises(ValidationError) as exc:
            parse_body(OptionalInfoIn, {field: value})
        assert exc.value.to_body()["input_error"].startswith(field)


class TestNestedEntries:
    def test_language_lowercased_and_level_optional(self):
        body = LearningLanguageIn.model_validate({"language": "Japanese"})
        assert body.language == "japanese"
        assert body.level == ""

    def test_language_level_must_be_known(self):
        with pytest.raises(ValidationError):
            parse_body(LearningLanguageIn, {"language": "japanese", "level": "Fluent-ish"})

    def test_travel_plan_entry_has_iso_dates(self):
        entry = TravelPlanIn.model_validate(_plan()).to_entry()
        assert entry == {
            "destination": "Kyoto",
            "arrival_date": "2025-04-01",
            "departure_date": "2025-04-10",
            "number_of_travelers": 2,
            "description": "Cherry blossoms",
        }

    @pytest.mark.parametrize("overrides", [
        {"number_of_travelers": 0},
        {"number_of_travelers": 101},
        {"departure_date": "2025-03-31"},
        {"description": "ok"},
    ])
    def test_travel_plan_rejects(self, overrides):
        with pytest.raises(ValidationError):
            parse_body(TravelPlanIn, _plan(**overrides))


class TestErrorLocation:
    def test_union_branch_tags_are_not_reported_as_fields(self):
        with pytest.raises(ValidationError) as exc:
            parse_body(LearningLanguageIn, {"language": "japanese", "level": None})
        message = exc.value.to_body()["input_error"]
        assert message.startswith("level: ")
        assert "literal[" not in message

    def test_list_item_index_is_kept(self):
        with pytest.raises(ValidationError) as exc:
            parse_body(OptionalInfoIn, {"interests": ["ok", 5]})
        assert exc.value.to_body()["input_error"].startswith("interests.1: ")

    def test_country_is_bounded(self):
        assert OptionalInfoIn.model_validate({"country": "C" * 100}).changes() == {"country": "C" * 100}
        with pytest.raises(ValidationError) as exc:
            parse_body(OptionalInfoIn, {"country": "C" * 101})
        assert exc.value.to_body()["input_error"].startswith("country: ")
