"""
Pydantic schemas for MyModel endpoints.

These are the serializers: request schemas validate incoming JSON,
response schemas are built straight from ORM objects.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================


class MyModelCreate(BaseModel):
    """
    Request body for POST /my-models

    Example:
        {
            "name": "inventory-sync",
            "description": "Nightly inventory synchronisation",
            "active": true
        }
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique name",
        examples=["inventory-sync"],
    )

    description: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Optional description",
        examples=["Nightly inventory synchronisation"],
    )

    active: bool = Field(
        default=True,
        description="Whether the record is active",
    )


class MyModelUpdate(BaseModel):
    """
    Request body for PATCH /my-models/{id}

    All fields are optional — only provided fields are updated.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="New name",
    )

    description: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="New description",
    )

    active: Optional[bool] = Field(
        default=None,
        description="New active flag",
    )

    @field_validator("name", "active")
    @classmethod
    def not_null(cls, value):
        # description may be cleared with null, name and active may not
        if value is None:
            raise ValueError("may not be null")
        return value


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================


class MyModelResponse(BaseModel):
    """
    MyModel as returned from the API.

    Example:
        {
            "id": 1,
            "name": "inventory-sync",
            "description": null,
            "active": true,
            "created_at": "2025-01-01T12:00:00Z"
        }
    """

    id: int
    name: str
    description: Optional[str]
    active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MyModelListResponse(BaseModel):
    """Paginated list of MyModel rows."""

    items: list[MyModelResponse]
    total: int
    page: int
    size: int
