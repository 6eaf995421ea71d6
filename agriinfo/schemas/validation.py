from __future__ import annotations

from typing import Any, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..domain.errors import SchemaViolation


ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


def _field_path(shape: Type[BaseModel], loc: Sequence[Any]) -> str:
    if not loc:
        return shape.__name__
    parts = []
    for index, item in enumerate(loc):
        if index == 0 and isinstance(item, str) and item in shape.model_fields:
            alias = shape.model_fields[item].alias
            parts.append(alias or item)
        else:
            parts.append(str(item))
    return ".".join(parts)


def _constraint(error: dict) -> str:
    message = str(error.get("msg", "invalid value"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    return message


def violation_from_error(shape: Type[BaseModel], exc: ValidationError) -> SchemaViolation:
    errors = exc.errors()
    if not errors:
        return SchemaViolation(shape.__name__, "invalid value")
    first = errors[0]
    return SchemaViolation(_field_path(shape, first.get("loc", ())), _constraint(first))


def validate_shape(shape: Type[ModelT], value: Any) -> ModelT:
    """
    Check ``value`` against ``shape`` and return it typed as ``shape``.

    Accepts a pydantic model or a plain mapping. Models, including instances of
    ``shape`` itself, are re-checked through their aliased dump, since
    ``model_construct`` and ``model_copy(update=...)`` skip validation.

    Raises:
        SchemaViolation: naming the first offending field and its constraint.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True, warnings=False)
    try:
        return shape.model_validate(value)
    except ValidationError as exc:
        raise violation_from_error(shape, exc) from exc
