"""
Field validators that report a fixed human-readable message.

Request bodies are validated field by field and every failure is returned
to the client as a (field, message) pair, so each required field carries the
message it should be reported with. Fields using these validators are
declared Optional with validate_default=True so that a missing key produces
the same message as a blank one.
"""

import keyword
from typing import Any
from pydantic import AfterValidator


def required(message: str) -> AfterValidator:
    def check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(message)
        return value

    return AfterValidator(check)


def min_length(length: int, message: str) -> AfterValidator:
    def check(value: Any) -> Any:
        if value is None or len(value) < length:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def error_field(loc: tuple) -> str:
    """
    Client-facing field name for a pydantic error location.

    A missing aliased field is reported under its Python name when the
    default is validated, so keyword-escaped names ("from_") map back to
    the key the client sends ("from").
    """
    parts = [part for part in loc if part != "body"]
    if not parts:
        return "body"
    field = str(parts[-1])
    if field.endswith("_") and keyword.iskeyword(field[:-1]):
        return field[:-1]
    return field
