"""Shared pydantic configuration for run-state models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GameModel(BaseModel):
    """Base class for every serialized game entity.

    Fields are snake_case in Python and camelCase on the wire so saves
    written by other clients of the format load unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
        use_enum_values=True,
    )


__all__ = ["GameModel"]
