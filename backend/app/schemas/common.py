"""Shared schema base classes and input parsing helpers."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from app.errors import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def enum_pattern(values: tuple[str, ...]) -> str:
    """Build an anchored regex accepting exactly one of ``values``."""
    return f"^({'|'.join(values)})$"


def blank_as_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings (common in forms and query strings) as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def parse_input(
    model_cls: type[ModelT],
    data: Mapping[str, Any],
    error_cls: type[InvalidInputError] = InvalidInputError,
) -> ModelT:
    """Validate raw input into ``model_cls``, raising a domain error instead of pydantic's."""
    try:
        return model_cls.model_validate(dict(data))
    except ValidationError as exc:
        raise error_cls.from_pydantic(exc) from exc
