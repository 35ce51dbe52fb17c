"""
Request contracts for the HTTP boundary.

Each inbound body or query string is parsed into one of the pydantic
models below before it reaches the services.  The models are
framework-independent; ``parse`` is the single entry point views use,
and it converts a pydantic failure into the API's ``ValidationError``
with a ``{field: [messages]}`` mapping.

Validators raise ``PydanticCustomError`` so the client sees exactly the
messages defined here rather than pydantic's generic wording.  Fields
default to ``None`` with ``validate_default=True`` so that an absent
field goes through the same validator as a present-but-invalid one.
"""

from __future__ import annotations

from typing import Any, TypeVar

import pydantic
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from .errors import ValidationError
from .models import TaskStatus

PASSWORD_MIN_LENGTH = 6
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# LIMIT and OFFSET must fit a signed 64-bit SQL integer
MAX_OFFSET = 2**63 - 1
MAX_PAGE = MAX_OFFSET // MAX_LIMIT + 1

STATUS_MESSAGE = f"Status must be one of: {', '.join(TaskStatus.values())}"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _invalid(kind: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(kind, message)


class CredentialsIn(BaseModel):
    """Body of ``POST /auth/register`` and ``POST /auth/login``."""

    # Unknown keys are dropped rather than rejected
    model_config = ConfigDict(extra="ignore")

    email: str = Field(default=None, validate_default=True)
    password: str = Field(default=None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise _invalid("email", "Invalid email format")
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise _invalid("email", "Invalid email format") from None
        return value

    @field_validator("password", mode="before")
    @classmethod
    def _check_password(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise _invalid("password_required", "Password is required")
        if len(value) < PASSWORD_MIN_LENGTH:
            raise _invalid(
                "password_length",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            )
        return value


def _check_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise _invalid("status", STATUS_MESSAGE) from None


class TaskIn(BaseModel):
    """Body of ``POST /tasks`` and ``PUT /tasks/<id>``."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default=None, validate_default=True)
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise _invalid("title_required", "Title is required")
        if len(value) < TITLE_MIN_LENGTH:
            raise _invalid(
                "title_length",
                f"Title must be at least {TITLE_MIN_LENGTH} characters long",
            )
        if len(value) > TITLE_MAX_LENGTH:
            raise _invalid(
                "title_length",
                f"Title must be at most {TITLE_MAX_LENGTH} characters long",
            )
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> str:
        # Only runs when the key is present; an explicit null is rejected
        if not isinstance(value, str):
            raise _invalid("description_type", "Description must be a string")
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise _invalid(
                "description_length",
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters long",
            )
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _check_task_status(cls, value: Any) -> TaskStatus:
        return _check_status(value)


def _positive_int(value: Any, field: str, default: int, maximum: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise _invalid(f"{field}_type", f"{field.capitalize()} must be a number") from None
    if number < 1:
        raise _invalid(f"{field}_range", f"{field.capitalize()} must be at least 1")
    if number > maximum:
        raise _invalid(
            f"{field}_range", f"{field.capitalize()} must be at most {maximum}"
        )
    return number


class TaskListQuery(BaseModel):
    """Query string of ``GET /tasks``."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=DEFAULT_PAGE, validate_default=True)
    limit: int = Field(default=DEFAULT_LIMIT, validate_default=True)
    status: TaskStatus | None = None

    @field_validator("page", mode="before")
    @classmethod
    def _check_page(cls, value: Any) -> int:
        return _positive_int(value, "page", DEFAULT_PAGE, MAX_PAGE)

    @field_validator("limit", mode="before")
    @classmethod
    def _check_limit(cls, value: Any) -> int:
        return _positive_int(value, "limit", DEFAULT_LIMIT, MAX_LIMIT)

    @field_validator("status", mode="before")
    @classmethod
    def _check_filter_status(cls, value: Any) -> TaskStatus | None:
        if value is None or value == "":
            return None
        return _check_status(value)


def validation_details(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by top-level field name."""
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        details.setdefault(field, []).append(error["msg"])
    return details


def parse(schema: type[SchemaT], data: Any) -> SchemaT:
    """
    Validate *data* against *schema*.

    Raises:
        ValidationError: With per-field messages when *data* does not
            satisfy the schema, or when it is not a JSON object at all.
    """
    if not isinstance(data, dict):
        raise ValidationError(details={"body": ["Request body must be a JSON object"]})
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(details=validation_details(exc)) from exc
