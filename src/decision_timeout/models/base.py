"""Base Pydantic schema for the project.

Provides common base classes for all Pydantic models in decision-timeout
with shared configuration and validation behavior.
"""

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema", "FrozenSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - from_attributes: Enable attribute-based construction
    - str_strip_whitespace: Automatically strip whitespace from strings
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
    )


class FrozenSchema(BaseSchema):
    """Base model for immutable values.

    Instances are never changed in place; "mutations" return a new
    instance via model_copy().
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        frozen=True,
    )
