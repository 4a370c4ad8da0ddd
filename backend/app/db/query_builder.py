"""
Partial update builder

Turns a mapping of allow-listed field -> new value into a single
parameterized UPDATE statement. Column names only ever come from the
ProjectField enum, never from caller-supplied strings.
"""

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple, Type, Union

from sqlalchemy import update
from sqlalchemy.sql.dml import Update

from app.db.base import utc_now


class ProjectField(str, enum.Enum):
    """Project columns a caller may change."""
    NAME = "name"
    DESCRIPTION = "description"
    STATUS = "status"
    SETTINGS = "settings"


class EmptyUpdateError(ValueError):
    """Raised when there is nothing to SET."""

    def __init__(self, message: str = "No fields to update"):
        super().__init__(message)


class UnknownFieldError(ValueError):
    """Raised when a key is not part of the allow-list."""

    def __init__(self, field: Any):
        self.field = field
        super().__init__(f"Field {field!r} cannot be updated")


@dataclass(frozen=True)
class PartialUpdate:
    """
    A built UPDATE statement.

    Attributes:
        statement: UPDATE ... SET ... WHERE ... RETURNING <model>
        columns: SET columns in placeholder order, touch column last
        values: bind values in placeholder order (SET values, then selectors)
    """
    statement: Update
    columns: Tuple[str, ...]
    values: Tuple[Any, ...]


def _coerce_field(key: Union[str, enum.Enum], allowed: Type[enum.Enum]) -> enum.Enum:
    if isinstance(key, allowed):
        return key
    try:
        return allowed(key)
    except ValueError:
        raise UnknownFieldError(key) from None


def _bind_value(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


def build_partial_update(
        model,
        changes: Mapping[Union[str, enum.Enum], Any],
        selectors: Sequence[Tuple[str, Any]],
        *,
        allowed: Type[enum.Enum] = ProjectField,
        touch_column: str = "updated_at",
        now: Optional[Any] = None,
) -> PartialUpdate:
    """
    Build an UPDATE for the supplied fields plus the touch column.

    Args:
        model: ORM model class to update
        changes: field -> new value, in the order the SET clause should use
        selectors: (column, value) pairs that must all match, e.g. id and owner
        allowed: enum of updatable columns
        touch_column: timestamp column always appended to SET
        now: timestamp value, defaults to the current UTC time

    Returns:
        PartialUpdate with the statement and its ordered bindings

    Raises:
        EmptyUpdateError: If changes is empty
        UnknownFieldError: If a key is not a member of ``allowed``
    """
    if not changes:
        raise EmptyUpdateError()
    if not selectors:
        raise ValueError("At least one row selector is required")

    assignments = []
    for key, value in changes.items():
        field = _coerce_field(key, allowed)
        assignments.append((field.value, _bind_value(value)))
    assignments.append((touch_column, now if now is not None else utc_now()))

    statement = (
        update(model)
        .where(*[getattr(model, column) == value for column, value in selectors])
        .ordered_values(*[(getattr(model, column), value) for column, value in assignments])
        .returning(model)
        .execution_options(populate_existing=True)
    )

    return PartialUpdate(
        statement=statement,
        columns=tuple(column for column, _ in assignments),
        values=tuple(value for _, value in assignments) + tuple(value for _, value in selectors),
    )
