"""Common schema utilities and base classes."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire; input accepts
    either spelling.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
    )


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields."""

    created_at: datetime
    updated_at: datetime


class FeeComponents(BaseSchema):
    """The six monthly fee components."""

    tuition_fee: float = Field(0, ge=0)
    lab_fee: float = Field(0, ge=0)
    library_fee: float = Field(0, ge=0)
    sports_fee: float = Field(0, ge=0)
    exam_fee: float = Field(0, ge=0)
    other_fee: float = Field(0, ge=0)


class FeeComponentsUpdate(BaseSchema):
    """Partial update of fee components; unset components keep their value."""

    tuition_fee: float | None = Field(None, ge=0)
    lab_fee: float | None = Field(None, ge=0)
    library_fee: float | None = Field(None, ge=0)
    sports_fee: float | None = Field(None, ge=0)
    exam_fee: float | None = Field(None, ge=0)
    other_fee: float | None = Field(None, ge=0)


T = TypeVar("T")


class DataResponse(BaseSchema, Generic[T]):
    """Success envelope: ``{"data": ...}``."""

    data: T


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
