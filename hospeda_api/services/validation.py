"""
Translation of pydantic validation errors into localizable field issues.

Each issue carries the dotted field path, a message key for the front-ends'
message catalogs, and the raw pydantic error type.
"""

from typing import Any, Final, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

REQUIRED: Final[str] = "validationError.field.required"
TOO_SMALL: Final[str] = "validationError.field.tooSmall"
TOO_BIG: Final[str] = "validationError.field.tooBig"
INVALID_TYPE: Final[str] = "validationError.field.invalidType"
INVALID_ENUM: Final[str] = "validationError.field.invalidEnum"
INVALID_FORMAT: Final[str] = "validationError.field.invalidFormat"
UNRECOGNIZED: Final[str] = "validationError.field.unrecognized"
INVALID: Final[str] = "validationError.field.invalid"

MESSAGE_KEYS: Final[dict[str, str]] = {
    "missing": REQUIRED,
    "string_too_short": TOO_SMALL,
    "too_short": TOO_SMALL,
    "greater_than": TOO_SMALL,
    "greater_than_equal": TOO_SMALL,
    "string_too_long": TOO_BIG,
    "too_long": TOO_BIG,
    "less_than": TOO_BIG,
    "less_than_equal": TOO_BIG,
    "enum": INVALID_ENUM,
    "literal_error": INVALID_ENUM,
    "string_pattern_mismatch": INVALID_FORMAT,
    "extra_forbidden": UNRECOGNIZED,
}


def message_key_for(error_type: str) -> str:
    """Map a pydantic error type to a message key."""
    if error_type in MESSAGE_KEYS:
        return MESSAGE_KEYS[error_type]
    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        return INVALID_TYPE
    return INVALID


def field_issue(field: str, message_key: str, code: str) -> dict[str, Any]:
    return {"field": field, "message_key": message_key, "code": code}


def issues_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic error dicts.

    Returns:
        [{"field": "price", "message_key": "validationError.field.tooSmall",
          "code": "greater_than_equal"}, ...]
    """
    issues = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ())) or "input"
        issues.append(field_issue(field, message_key_for(error["type"]), error["type"]))
    return issues


def translate_validation_error(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return issues_from_errors(exc.errors())
