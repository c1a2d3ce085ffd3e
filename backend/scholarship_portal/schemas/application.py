"""
Scholarship Portal Backend — Applied Scholarship Request Schemas
=================================================================

Applications use camelCase keys on the wire (`userEmail`, `applicationStatus`).
Both `userEmail` and `email` are accepted and stored independently.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApplicationCreate(BaseModel):
    """Body of POST /applied-scholarships. Unknown fields are kept on the document."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_email: Any = Field(default=None, alias="userEmail")
    email: Any = None
    scholarship_id: Any = None
    application_status: Any = Field(default=None, alias="applicationStatus")
    feedback: Any = None


class FeedbackUpdate(BaseModel):
    """Body of POST /applications/{applicationId}/feedback."""
    feedback: Any = None
