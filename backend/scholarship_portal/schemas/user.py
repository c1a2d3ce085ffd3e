"""
Scholarship Portal Backend — User Request Schemas
==================================================
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Body of POST /users. The email is the natural key for duplicate detection."""
    model_config = ConfigDict(extra="allow")

    email: str = Field(min_length=1, description="Account email (unique)")
    name: Any = None
    photo: Any = Field(default=None, description="Profile photo URL")
    role: Any = Field(default=None, description="Free-text role, e.g. user, moderator, admin")


class RoleUpdate(BaseModel):
    """Body of PATCH /users/{id}/role."""
    role: str


class RoleResponse(BaseModel):
    role: Any = None
