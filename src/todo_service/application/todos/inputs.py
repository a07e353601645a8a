"""Input schemas and the validation collaborator.

Field errors are reported under the client-facing (camelCase) field names.
"""
from __future__ import annotations

import re
from typing import Annotated, Any, Callable, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from todo_service.application.todos.models import PriorityLevel, TodoStatus
from todo_service.kernel.types import FieldError, ValidationFailure

M = TypeVar("M", bound=BaseModel)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def _check_title(value: str) -> str:
    if len(value) < 3:
        raise PydanticCustomError("title_too_short", "Title must be at least 3 characters")
    if len(value) > 200:
        raise PydanticCustomError("title_too_long", "Title must not exceed 200 characters")
    return value


def _check_description(value: str | None) -> str | None:
    if value is not None and len(value) > 1000:
        raise PydanticCustomError("description_too_long", "Description must not exceed 1000 characters")
    return value


def _check_due_date(value: str | None) -> str | None:
    if value is not None and not _DATE_RE.match(value):
        raise PydanticCustomError("due_date_format", "Must be YYYY-MM-DD format")
    return value


def _enum_member(enum_cls: type[Any], label: str) -> Callable[[Any], Any]:
    allowed = [m.value for m in enum_cls]

    def check(value: Any) -> Any:
        if value is None or isinstance(value, enum_cls):
            return value
        if value not in allowed:
            raise PydanticCustomError(
                f"invalid_{label.lower()}",
                f"{label} must be one of: {', '.join(allowed)}",
            )
        return enum_cls(value)

    return check


def _check_optional_title(value: str | None) -> str | None:
    return None if value is None else _check_title(value)


def _check_tag_name(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("tag_name_empty", "Tag name must not be empty")
    if len(value) > 50:
        raise PydanticCustomError("tag_name_too_long", "Tag name must not exceed 50 characters")
    return value


def _check_tag_color(value: str) -> str:
    if not _COLOR_RE.match(value):
        raise PydanticCustomError("tag_color_format", "Tag color must be a hex color like #1A2B3C")
    return value


Title = Annotated[str, AfterValidator(_check_title)]
Description = Annotated[str | None, AfterValidator(_check_description)]
DueDate = Annotated[str | None, AfterValidator(_check_due_date), Field(alias="dueDate")]


class _Input(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class CreateTodoInput(_Input):
    title: Title
    description: Description = None
    due_date: DueDate = None


class UpdateTodoInput(_Input):
    title: Annotated[str | None, AfterValidator(_check_optional_title)] = None
    description: Description = None
    status: Annotated[TodoStatus | None, BeforeValidator(_enum_member(TodoStatus, "Status"))] = None
    due_date: DueDate = None

    def changes(self) -> dict[str, Any]:
        """Fields the caller supplied with a value; ``None`` leaves a column untouched."""
        return self.model_dump(exclude_none=True)


class SetPriorityInput(_Input):
    level: Annotated[PriorityLevel, BeforeValidator(_enum_member(PriorityLevel, "Priority"))]


class AddTagInput(_Input):
    name: Annotated[str, AfterValidator(_check_tag_name), Field(alias="tagName")]
    color: Annotated[str, AfterValidator(_check_tag_color), Field(alias="tagColor")]


def validate_input(schema: type[M], data: Any) -> M | ValidationFailure:
    """Validate *data* against *schema*; one :class:`FieldError` per issue."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        return ValidationFailure(
            fields=tuple(
                FieldError(field=".".join(str(part) for part in err["loc"]), message=err["msg"])
                for err in exc.errors()
            )
        )


__all__ = [
    "AddTagInput",
    "CreateTodoInput",
    "SetPriorityInput",
    "UpdateTodoInput",
    "validate_input",
]
