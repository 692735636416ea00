"""
API Response Models.

Pydantic models for API response serialization.
User and report payloads keep the column names of the underlying tables;
the generation response uses the camelCase keys the web client expects.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """A stored user record."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="System-assigned identifier")
    name: str
    email: str
    phone: Optional[str] = None
    department: str
    position: str
    salary: float
    hire_date: date
    created_at: datetime


class UserCreatedResponse(BaseModel):
    """Acknowledgement returned after adding a user."""

    id: int = Field(..., description="Identifier of the new user")
    message: str = Field(default="User created successfully")


class ReportResponse(BaseModel):
    """A row of the report history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    report_type: str
    generated_by: Optional[str] = None
    file_path: str = Field(..., description="File name inside the downloads directory")
    created_at: datetime


class GeneratePDFResponse(BaseModel):
    """Successful PDF generation result."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True)
    filename: str = Field(..., description="Generated file name, report_<uuid>.pdf")
    download_url: str = Field(
        ..., alias="downloadUrl", description="Relative URL to fetch the PDF"
    )
    message: str = Field(default="PDF generated successfully")


class HealthCheckComponent(BaseModel):
    """Health status of an individual component."""

    name: str = Field(..., description="Component name")
    status: Literal["healthy", "degraded", "unhealthy"] = Field(
        ..., description="Component health status"
    )
    latency_ms: Optional[float] = Field(
        default=None, description="Check latency in milliseconds"
    )
    message: Optional[str] = Field(default=None, description="Status message")


class HealthResponse(BaseModel):
    """Aggregate health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    environment: str
    uptime_seconds: float
    timestamp: datetime
    checks: List[HealthCheckComponent] = Field(default_factory=list)
    details: Optional[Dict[str, Any]] = None
