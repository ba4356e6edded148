"""Request validator — deterministic validation layer for the permit API.

Usage:
    from permitgate.validators import validation_engine, get_schema

    outcome = validation_engine.evaluate(get_schema("createPermit"), payload)
    if outcome.rejected:
        # Respond 400 with outcome.violations
"""

from permitgate.validators.adapter import (
    RequestCapabilities,
    RequestPart,
    ValidationAdapter,
    build_error_body,
    format_validation_error,
    validate_request,
    validation_adapter,
)
from permitgate.validators.catalog import SCHEMAS, get_schema, list_schemas
from permitgate.validators.engine import ValidationEngine, evaluate, validation_engine
from permitgate.validators.errors import SchemaDefinitionError, UnknownSchemaError
from permitgate.validators.models import (
    ValidationOptions,
    ValidationOutcome,
    Violation,
    ViolationKind,
)
from permitgate.validators.schema import FieldSpec, Schema

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "evaluate",
    "ValidationAdapter",
    "validation_adapter",
    "validate_request",
    "RequestPart",
    "RequestCapabilities",
    "build_error_body",
    "format_validation_error",
    "SCHEMAS",
    "get_schema",
    "list_schemas",
    "Schema",
    "FieldSpec",
    "ValidationOptions",
    "ValidationOutcome",
    "Violation",
    "ViolationKind",
    "SchemaDefinitionError",
    "UnknownSchemaError",
]
