"""Validation rules applied to the values collected by the prompts.

Every validator takes the raw input and returns ``True`` when it is
acceptable, or the message to show the operator otherwise.
"""

from __future__ import annotations

import re
from functools import partial
from typing import Callable, Union

from .manifest import AttributeSet

__all__ = [
    "MAX_PACKAGE_NAME_LENGTH",
    "ValidationResult",
    "Validator",
    "is_valid_package_name",
    "validate_author",
    "validate_copyright",
    "validate_description",
    "validate_package_name",
    "validators_for",
]


ValidationResult = Union[bool, str]
Validator = Callable[[str], ValidationResult]

MAX_PACKAGE_NAME_LENGTH = 213

_PACKAGE_NAME = re.compile(r"^(?:@[a-z0-9~][a-z0-9-._~]*/)?[a-z0-9~][a-z0-9-._~]*$")


def is_valid_package_name(value: str) -> bool:
    """Return True when ``value`` is an acceptable npm package name."""

    return bool(_PACKAGE_NAME.fullmatch(value)) and len(value) <= MAX_PACKAGE_NAME_LENGTH


def validate_package_name(value: str, *, current: str | None = None) -> ValidationResult:
    if not value:
        return "Please enter a name"
    # The existing name is always accepted, even if it predates the rules.
    if current is not None and value == current:
        return True
    if not _PACKAGE_NAME.fullmatch(value):
        return "Please enter an NPM-compliant name"
    if len(value) > MAX_PACKAGE_NAME_LENGTH:
        return "Name is too long"
    return True


def validate_description(value: str) -> ValidationResult:
    return True if value else "Please enter a description"


def validate_author(value: str) -> ValidationResult:
    return True if value else "Please enter an author"


def validate_copyright(value: str) -> ValidationResult:
    return True if value else "Please enter a copyright"


def validators_for(current: AttributeSet) -> dict[str, Validator]:
    """Return the validator used for each attribute field."""

    return {
        "name": partial(validate_package_name, current=current.name),
        "description": validate_description,
        "author": validate_author,
        "copyright": validate_copyright,
    }
