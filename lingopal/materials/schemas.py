"""
Pydantic schemas for material resources.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MaterialFields(BaseModel):
    title: str | None = None
    type: str | None = None
    category: str | None = None
    source: str | None = None
    cover: str | None = None
    content: str | None = None
    description: str | None = None


class MaterialCreate(MaterialFields):
    title: str = Field(..., min_length=1)


class MaterialUpdate(MaterialFields):
    """``id`` selects the material; other omitted fields are left untouched."""

    id: int | None = Field(default=None, gt=0)


class MaterialResponse(MaterialFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime | None = None


class MaterialEnvelope(BaseModel):
    message: str
    data: MaterialResponse


class MessageResponse(BaseModel):
    message: str
