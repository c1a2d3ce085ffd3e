"""
Scholarship Portal Backend — Review Request Schemas
====================================================
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """Body of POST /reviews. Free-form beyond the two reference fields."""
    model_config = ConfigDict(extra="allow")

    email: Any = Field(default=None, description="Reviewer email")
    scholarship_id: Any = Field(default=None, description="Reviewed scholarship id")
    rating: Any = None
    comment: Any = None
