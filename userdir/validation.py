"""Declarative validation rules for user form submissions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import EmailStr, TypeAdapter, ValidationError

from .models import UserFields

NAME_MAX_LENGTH = 10
AGE_MIN = 18
AGE_MAX = 200
BIO_MAX_LENGTH = 200

_LETTERS = re.compile(r"[A-Za-z]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class Rule:
    """A single predicate applied to a trimmed field value."""

    check: Callable[[str], bool]
    message: str


@dataclass(frozen=True)
class FieldRules:
    """Ordered rules for one form field."""

    name: str
    attribute: str
    rules: Tuple[Rule, ...]
    optional: bool = False
    convert: Callable[[str], Any] = str


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class UserValidationError(ValueError):
    """Raised when a submission breaks one or more field rules."""

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(error.message for error in self.errors))

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]


def _is_alpha(value: str) -> bool:
    return _LETTERS.fullmatch(value) is not None


def _length_between(minimum: int, maximum: int) -> Callable[[str], bool]:
    def _check(value: str) -> bool:
        return minimum <= len(value) <= maximum

    return _check


def _is_email(value: str) -> bool:
    try:
        address = _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    # EmailStr also accepts "Name <addr>" and hands back only the address.
    return address.lower() == value.lower()


def _parse_int(value: str) -> Optional[int]:
    if _INTEGER.fullmatch(value) is None:
        return None
    return int(value)


def _is_age(value: str) -> bool:
    number = _parse_int(value)
    return number is not None and AGE_MIN <= number <= AGE_MAX


def _name_rules(label: str) -> Tuple[Rule, ...]:
    return (
        Rule(_is_alpha, f"{label} must only contain letters."),
        Rule(
            _length_between(1, NAME_MAX_LENGTH),
            f"{label} must be between 1 and {NAME_MAX_LENGTH} characters.",
        ),
    )


USER_RULES: Tuple[FieldRules, ...] = (
    FieldRules("firstName", "first_name", _name_rules("First name")),
    FieldRules("lastName", "last_name", _name_rules("Last name")),
    FieldRules("email", "email", (Rule(_is_email, "Email must be an email"),)),
    FieldRules(
        "age",
        "age",
        (Rule(_is_age, f"Age must be a number between {AGE_MIN} and {AGE_MAX}"),),
        optional=True,
        convert=int,
    ),
    FieldRules(
        "bio",
        "bio",
        (
            Rule(
                _length_between(0, BIO_MAX_LENGTH),
                f"Bio must be below {BIO_MAX_LENGTH} characters",
            ),
        ),
        optional=True,
    ),
)

_RULES_BY_NAME: Dict[str, FieldRules] = {spec.name: spec for spec in USER_RULES}


def _clean(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def check_field(name: str, raw_value: object) -> List[str]:
    """Run the rules for a single field and return the failure messages."""

    try:
        spec = _RULES_BY_NAME[name]
    except KeyError as exc:
        raise KeyError(f"Unknown field '{name}'") from exc

    value = _clean(raw_value)
    if spec.optional and not value:
        return []
    return [rule.message for rule in spec.rules if not rule.check(value)]


def _evaluate(form: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[FieldError]]:
    values: Dict[str, Any] = {}
    errors: List[FieldError] = []
    for spec in USER_RULES:
        value = _clean(form.get(spec.name))
        if spec.optional and not value:
            values[spec.attribute] = None
            continue
        failures = [rule.message for rule in spec.rules if not rule.check(value)]
        if failures:
            errors.extend(FieldError(spec.name, message) for message in failures)
            continue
        values[spec.attribute] = spec.convert(value)
    return values, errors


def collect_errors(form: Mapping[str, Any]) -> List[FieldError]:
    """Return every rule violation in ``form`` without raising."""

    _, errors = _evaluate(form)
    return errors


def validate_user(form: Mapping[str, Any]) -> UserFields:
    """Validate a submission and return the trimmed, converted values.

    All violations across all fields are gathered before
    :class:`UserValidationError` is raised. Optional fields that are missing or
    blank are returned as ``None``.
    """

    values, errors = _evaluate(form)
    if errors:
        raise UserValidationError(errors)
    return UserFields(**values)


__all__ = [
    "FieldError",
    "FieldRules",
    "Rule",
    "USER_RULES",
    "UserValidationError",
    "check_field",
    "collect_errors",
    "validate_user",
]
