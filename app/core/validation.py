# app/core/validation.py
"""
Request payload checks.

Every check function takes the raw JSON body (already decoded by FastAPI)
and returns a ValidationResult. Checks never touch the database.

Messages follow the form `"<Label>" <problem>`, e.g.:

    "Title" is required
    "Priority" must be one of [low, medium, high]
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from app.models.task import PRIORITIES

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str | None:
        """Message of the first violated constraint, if any."""
        return self.errors[0].message if self.errors else None

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))


# A rule inspects one value and returns an error message, or None if valid.
Rule = Callable[[str, Any], str | None]


@dataclass(frozen=True)
class FieldSpec:
    label: str
    rules: tuple[Rule, ...]
    required: bool = False
    nullable: bool = False


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def string(
    min_len: int | None = None,
    max_len: int | None = None,
    allow_empty: bool = False,
    trim: bool = True,
) -> Rule:
    """
    String rule. Lengths are measured on the trimmed value unless trim=False
    (passwords are taken verbatim).
    """

    def rule(label: str, value: Any) -> str | None:
        if not isinstance(value, str):
            return f'"{label}" must be a string'
        text = value.strip() if trim else value
        if not text:
            if allow_empty:
                return None
            return f'"{label}" is not allowed to be empty'
        if min_len is not None and len(text) < min_len:
            return f'"{label}" length must be at least {min_len} characters long'
        if max_len is not None and len(text) > max_len:
            return f'"{label}" length must be less than or equal to {max_len} characters long'
        return None

    return rule


def email(label: str, value: Any) -> str | None:
    if not EMAIL_RE.fullmatch(value.strip()):
        return f'"{label}" must be a valid email'
    return None


def one_of(*choices: str) -> Rule:
    def rule(label: str, value: Any) -> str | None:
        if value not in choices:
            return f'"{label}" must be one of [{", ".join(choices)}]'
        return None

    return rule


def boolean(label: str, value: Any) -> str | None:
    if not isinstance(value, bool):
        return f'"{label}" must be a boolean'
    return None


def date(label: str, value: Any) -> str | None:
    try:
        parse_due_date(value)
    except ValueError:
        return f'"{label}" must be a valid date'
    return None


# ---------------------------------------------------------------------------
# Core checker
# ---------------------------------------------------------------------------


def _check(data: Any, fields: Mapping[str, FieldSpec]) -> ValidationResult:
    result = ValidationResult()

    if not isinstance(data, Mapping):
        result.add("body", '"value" must be of type object')
        return result

    for name, spec in fields.items():
        if name not in data:
            if spec.required:
                result.add(name, f'"{spec.label}" is required')
            continue

        value = data[name]
        if value is None:
            if not spec.nullable:
                result.add(name, f'"{spec.label}" must not be null')
            continue

        for rule in spec.rules:
            message = rule(spec.label, value)
            if message:
                result.add(name, message)
                break

    for name in data:
        if name not in fields:
            result.add(name, f'"{name}" is not allowed')

    return result


# ---------------------------------------------------------------------------
# Payload shapes
# ---------------------------------------------------------------------------

NAME = FieldSpec("Name", (string(3, 50),))
BIO = FieldSpec("Bio", (string(max_len=200, allow_empty=True),))


def validate_register(data: Any) -> ValidationResult:
    """Signup body: {email, password, name?}."""
    return _check(
        data,
        {
            "email": FieldSpec("Email", (string(), email), required=True),
            "password": FieldSpec("Password", (string(6, trim=False),), required=True),
            "name": NAME,
        },
    )


def validate_login(data: Any) -> ValidationResult:
    return _check(
        data,
        {
            "email": FieldSpec("Email", (string(), email), required=True),
            "password": FieldSpec("Password", (string(6, trim=False),), required=True),
        },
    )


def validate_task(data: Any, is_update: bool = False) -> ValidationResult:
    """
    Task body for create (is_update=False) and update (is_update=True).

    `title` is required only on create; on update every field is optional
    so clients can send e.g. just {"completed": true}.
    """
    return _check(
        data,
        {
            "title": FieldSpec("Title", (string(3, 100),), required=not is_update),
            "description": FieldSpec(
                "Description", (string(max_len=500, allow_empty=True),)
            ),
            "dueDate": FieldSpec("Due Date", (date,), nullable=True),
            "priority": FieldSpec("Priority", (one_of(*PRIORITIES),)),
            "completed": FieldSpec("Completed Status", (boolean,)),
        },
    )


def validate_profile_update(data: Any) -> ValidationResult:
    return _check(data, {"name": NAME, "bio": BIO})


def validate_password_change(data: Any) -> ValidationResult:
    return _check(
        data,
        {
            "currentPassword": FieldSpec(
                "Current Password", (string(6, trim=False),), required=True
            ),
            "newPassword": FieldSpec("New Password", (string(6, trim=False),), required=True),
        },
    )


# ---------------------------------------------------------------------------
# Value conversion
# ---------------------------------------------------------------------------


def parse_due_date(value: Any) -> datetime | None:
    """
    Convert an accepted `dueDate` value to a datetime.

    Accepts:
      - None
      - ISO-8601 strings ("2024-03-01", "2024-03-01T10:00:00Z", ...)
      - numbers, read as milliseconds since the Unix epoch

    Raises:
        ValueError: for anything else.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("boolean is not a date")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(str(e)) from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        # Store everything as UTC; naive values are taken to be UTC already.
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    raise ValueError(f"unsupported date value: {value!r}")


def normalize_email(value: str) -> str:
    return value.strip().lower()
