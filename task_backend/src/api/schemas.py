from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new Task.
    Text fields must be non-empty strings and are stored exactly as sent.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Water the plants",
                "color": "#34d399",
                "completed": False,
            }
        }
    )

    title: str = Field(..., description="Title of the task", min_length=1, strict=True)
    color: str = Field(..., description="Free-form color label", min_length=1, strict=True)
    completed: bool = Field(default=False, description="Completion status flag", strict=True)


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Schema for updating an existing Task.
    All fields are optional; only provided fields are applied. A provided field
    must still be valid, so explicit nulls are rejected.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "completed": True,
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Title of the task", min_length=1, strict=True)
    color: Optional[str] = Field(default=None, description="Free-form color label", min_length=1, strict=True)
    completed: Optional[bool] = Field(default=None, description="Completion status flag", strict=True)

    @field_validator("title", "color", "completed")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        # Defaults are not validated, so this only runs for supplied values.
        if v is None:
            raise ValueError(f"{info.field_name} must not be null")
        return v

    def changes(self) -> dict:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a Task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0b6f7a0e-3c1e-4a8b-9a57-7f3d2b9c1e44",
                "title": "Water the plants",
                "color": "#34d399",
                "completed": False,
                "createdAt": "2025-01-25T10:15:30.123456Z",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Title of the task")
    color: str = Field(..., description="Free-form color label")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., serialization_alias="createdAt", description="Creation timestamp")
