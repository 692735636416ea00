"""
API Request Models.

Pydantic models for request validation.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Report types double as template file stems, so keep them filesystem-safe
REPORT_TYPE_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    """Fields accepted when adding a user record."""

    name: str = Field(..., min_length=1, max_length=200, description="Full name")
    email: str = Field(
        ..., max_length=254, pattern=EMAIL_PATTERN, description="Unique email address"
    )
    phone: Optional[str] = Field(default=None, max_length=50, description="Phone number")
    department: str = Field(..., min_length=1, max_length=100, description="Department")
    position: str = Field(..., min_length=1, max_length=100, description="Job title")
    salary: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Annual salary, non-negative"
    )
    hire_date: date = Field(..., description="Hire date (YYYY-MM-DD)")

    @field_validator("phone", mode="before")
    @classmethod
    def blank_phone_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty phone string from a form as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case emails so uniqueness is case-insensitive."""
        return v.lower()

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada.lovelace@company.com",
                "phone": "+1-555-0199",
                "department": "Engineering",
                "position": "Staff Engineer",
                "salary": 120000,
                "hire_date": "2024-02-01",
            }
        },
    )


class GeneratePDFRequest(BaseModel):
    """Body of a PDF generation request."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "reportType": "summary",
                "userIds": [1, 2],
                "title": "Quarterly Headcount",
                "description": "Engineering and marketing staff",
            }
        },
    )

    report_type: str = Field(
        ...,
        alias="reportType",
        pattern=REPORT_TYPE_PATTERN,
        description="Template key, e.g. 'employee' or 'summary'",
    )
    user_ids: Optional[List[int]] = Field(
        default=None,
        alias="userIds",
        max_length=500,
        description="Users to include; omitted or empty means all users",
    )
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    generated_by: Optional[str] = Field(
        default=None,
        alias="generatedBy",
        max_length=100,
        description="Free-text author label stored with the report",
    )

    @field_validator("title", "description", "generated_by", mode="before")
    @classmethod
    def blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Empty strings behave like missing values."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
