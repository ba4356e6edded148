"""API response models."""

from pydantic import BaseModel
from typing import Any, Optional, Literal


class ValidationErrorDetail(BaseModel):
    """A single violation in a 400 response."""

    field: str
    message: str
    type: str


class ValidationErrorResponse(BaseModel):
    """Body of every validation rejection."""

    error: str = "Validation Error"
    message: str = "Invalid request data"
    details: list[ValidationErrorDetail]


class SchemaFieldSummary(BaseModel):
    """One declared field of a catalog schema."""

    name: str
    type: str
    required: bool
    required_when: Optional[dict[str, Any]] = None
    constraints: list[str] = []


class SchemaSummary(BaseModel):
    """A catalog schema as exposed for introspection."""

    name: str
    fields: list[SchemaFieldSummary]
    invariants: list[str] = []


class ValidatedPayloadResponse(BaseModel):
    """Dry-run result for a payload that passed."""

    schema_name: str
    value: dict[str, Any]


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
