"""Errors raised while turning raw input into workflow models."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class WorkflowParseError(Exception):
    """Raised when a workflow or pack payload does not fit the schema."""

    def __init__(self, message: str, error_type: str = "schema_mismatch"):
        self.error_type = error_type
        super().__init__(message)


def coerce_model(model: type[ModelT], value: Any) -> ModelT:
    """Return ``value`` as an instance of ``model``, validating dicts on the way in."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise WorkflowParseError(
            f"Invalid {model.__name__.lower()} payload: {e.error_count()} validation error(s): "
            + "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
        ) from e
