"""Request payload validation.

Field checks live on the pydantic models in ``schemas.py`` as ``mode="before"``
validators that raise ``PydanticCustomError`` with the final, human-readable
message (``"<field> <constraint>"``). This module holds those reusable checks
and ``validate_payload``, which runs a model over a raw JSON body and
aggregates every violation into a single ``ValidationError``.
"""

from __future__ import annotations

import re
from typing import Any, Type, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from blog_api.core.database import MAX_INTEGER, MIN_INTEGER
from blog_api.core.errors import ValidationError

M = TypeVar("M", bound=BaseModel)

PASSWORD_MIN_LENGTH = 8
_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")


def _fail(kind: str, field: str, constraint: str):
    raise PydanticCustomError(kind, "{field} " + constraint, {"field": field})


def require_not_empty(value: Any, field: str) -> Any:
    if value is None or value == "":
        _fail("not_empty", field, "should not be empty")
    return value


def require_string(value: Any, field: str) -> str:
    if not isinstance(value, str):
        _fail("string_type", field, "must be a string")
    return value


def require_number(value: Any, field: str) -> int:
    """Integral JSON number that fits a 64-bit column; booleans and numeric strings are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        _fail("number_type", field, "must be a number conforming to the specified constraints")
    if isinstance(value, float):
        if not value.is_integer():
            _fail("number_type", field, "must be a number conforming to the specified constraints")
        value = int(value)
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        _fail("number_type", field, "must be a number conforming to the specified constraints")
    return value


def require_email(value: str, field: str) -> str:
    """Syntax check only; the address is kept exactly as sent."""
    try:
        # special-use TLDs like .test are accepted
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        _fail("email", field, "must be an email")
    return value


def is_strong_password(value: str) -> bool:
    return (
        len(value) >= PASSWORD_MIN_LENGTH
        and bool(_LOWER.search(value))
        and bool(_UPPER.search(value))
        and bool(_DIGIT.search(value))
        and bool(_SYMBOL.search(value))
    )


def require_strong_password(value: str, field: str) -> str:
    if not is_strong_password(value):
        _fail("weak_password", field, "is not strong enough")
    return value


def validate_payload(schema: Type[M], body: Any) -> M:
    """Validate a decoded JSON body against ``schema``.

    Non-object bodies (absent, list, scalar) are treated as an empty object.
    Raises ``ValidationError`` with all messages, in field order.
    """
    data = body if isinstance(body, dict) else {}
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        messages = []
        for err in e.errors():
            msg = err["msg"]
            if msg not in messages:
                messages.append(msg)
        raise ValidationError(messages) from None
