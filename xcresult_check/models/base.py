"""Base model configuration for all data structures."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(frozen=True)


def as_count(value: Any) -> int:
    """Coerce a reported counter to a non-negative int.

    Counters arrive as JSON numbers or, in the legacy schema, as strings.
    Nulls, negatives and anything that is not a whole number count as zero.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        return 0
    return max(value, 0)


def none_as_empty(value: Any) -> Any:
    """Treat an explicit JSON null list as an empty list."""
    return [] if value is None else value


Count = Annotated[int, BeforeValidator(as_count)]
