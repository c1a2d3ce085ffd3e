"""
Scholarship Portal Backend — Scholarship Request Schemas
=========================================================

What:  Request bodies for creating and updating scholarships.
How:   Field values are untyped JSON and are stored verbatim. ScholarshipCreate
       also keeps any extra field.
       ScholarshipUpdate ignores everything outside its named field set.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScholarshipFields(BaseModel):
    university_name: Any = None
    university_logo: Any = None
    scholarship_category: Any = Field(
        default=None, description="e.g. Full fund, Partial fund, Self-fund"
    )
    scholarship_description: Any = None
    degree_name: Any = Field(default=None, description="e.g. Diploma, Bachelor, Masters")
    subject_name: Any = None
    application_deadline: Any = Field(default=None, description="ISO 8601 date")
    post_date: Any = Field(default=None, description="ISO 8601 date")
    stipend: Any = None
    service_charge: Any = None
    application_fees: Any = None


class ScholarshipCreate(ScholarshipFields):
    """Body of POST /scholarships. Unknown fields are kept on the document."""
    model_config = ConfigDict(extra="allow")

    university_location: Any = Field(
        default=None, description='Nested location, e.g. {"country": "Japan"}'
    )


class ScholarshipUpdate(ScholarshipFields):
    """
    Body of PUT /update-scholarships/{id}.

    All named fields are applied, absent ones as null. `country` is written into
    `university_location.country`; any other key in the body is dropped.
    """
    model_config = ConfigDict(extra="ignore")

    country: Any = None
