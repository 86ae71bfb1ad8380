"""Base model for camelCase request and response payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accept and emit camelCase keys while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


__all__ = ["CamelModel"]
