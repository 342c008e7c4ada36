from datetime import datetime
from pydantic import BaseModel, Field, StrictStr, field_validator
from core.attribute_types import AttributeType


def _scalar_value(value):
    # JSON strings and numbers only; the type codec decides what fits
    if value is None or (isinstance(value, (str, int, float)) and not isinstance(value, bool)):
        return value
    raise ValueError("Value must be text or a number.")


class AttributeCreate(BaseModel):
    """Client payload for creating an attribute. ``type`` is checked by the store."""
    project_id: str
    name: str = Field(min_length=1, max_length=255)
    type: str
    value: str | int | float | None = None
    options: list[StrictStr] | None = None

    @field_validator("value", mode="before")
    @classmethod
    def check_value(cls, value):
        return _scalar_value(value)


class AttributeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: str | None = None
    value: str | int | float | None = None
    options: list[StrictStr] | None = None

    @field_validator("value", mode="before")
    @classmethod
    def check_value(cls, value):
        return _scalar_value(value)


class AttributeResponse(BaseModel):
    id: int
    project_id: str
    name: str
    type: AttributeType
    value: str | None = None
    options: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class AttributeListResponse(BaseModel):
    data: list[AttributeResponse]
