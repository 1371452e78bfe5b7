# app/schemas/base.py
"""
Shared validation helpers.

Request bodies are validated explicitly with ``parse_body`` before any store
write, so every endpoint can report failures under its own error key.
"""
import datetime as dt
import re
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, AnyUrl, BaseModel, BeforeValidator, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_FIELD_NAME = re.compile(r"^[A-Za-z_]\w*$")
_url_adapter = TypeAdapter(AnyUrl)


class StrictBody(BaseModel):
    """Base for request bodies: unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")


def _require_iso_date(value: Any) -> Any:
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValueError("must be in YYYY-MM-DD format")
    return value


# Date given as "YYYY-MM-DD" only (no timestamps, no datetimes)
IsoDate = Annotated[dt.date, BeforeValidator(_require_iso_date)]


def blank_or_length(min_length: int, max_length: int):
    """Accept "" (meaning: clear the field) or a string within the length bounds."""

    def check(value: str) -> str:
        if value and not (min_length <= len(value) <= max_length):
            raise ValueError(f"length must be between {min_length} and {max_length} characters")
        return value

    return AfterValidator(check)


def _check_url(value: str) -> str:
    if value:
        try:
            _url_adapter.validate_python(value)
        except PydanticValidationError:
            raise ValueError("must be a valid uri")
    return value


# "" (clear) or an absolute URI
BlankOrUrl = Annotated[str, AfterValidator(_check_url)]


def split_list(value: Any) -> Any:
    """Comma separated string -> list of strings; lists pass through."""
    if isinstance(value, str):
        return [part for part in re.split(r",\s*", value.strip()) if part] if value.strip() else ""
    return value


def describe(exc: PydanticValidationError) -> str:
    """First error as ``field: message`` (field-level detail, one line)."""
    err = exc.errors()[0]
    # Union / literal branch tags (e.g. "literal[...]", "list[str]") are not fields
    parts = [str(p) for p in err.get("loc", ()) if isinstance(p, int) or _FIELD_NAME.match(str(p))]
    field = ".".join(parts) or "body"
    return f"{field}: {err.get('msg', 'invalid value')}"


def parse_body(model: type[ModelT], payload: Any, key: str = "input_error") -> ModelT:
    """
    Validate ``payload`` against ``model``.

    Raises:
        ValidationError: With ``key`` as the body key and the first failing
            field in the message.
    """
    if not isinstance(payload, dict):
        raise ValidationError("body: must be a JSON object", key=key)
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(describe(e), key=key)
