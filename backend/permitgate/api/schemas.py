"""Schemas API — list the catalog and dry-run a payload against a schema."""

from fastapi import APIRouter, HTTPException, Request

import structlog

from permitgate.api.validation import FastAPIRequestParts, read_json_body, run_validation
from permitgate.models.responses import (
    SchemaFieldSummary,
    SchemaSummary,
    ValidatedPayloadResponse,
    ValidationErrorResponse,
)
from permitgate.validators.adapter import RequestPart
from permitgate.validators.catalog import SCHEMAS, get_schema
from permitgate.validators.constraints import RequiredWhen
from permitgate.validators.errors import UnknownSchemaError
from permitgate.validators.schema import FieldSpec, Schema

logger = structlog.get_logger()

router = APIRouter()


def _summarize_field(spec: FieldSpec) -> SchemaFieldSummary:
    condition = next(iter(spec.conditions), None)
    return SchemaFieldSummary(
        name=spec.name,
        type=spec.type.value,
        required=spec.required,
        required_when=(
            {"field": condition.ref, "equals": condition.equals}
            if isinstance(condition, RequiredWhen) else None
        ),
        constraints=[type(c).__name__ for c in spec.value_constraints],
    )


def _summarize(schema: Schema) -> SchemaSummary:
    return SchemaSummary(
        name=schema.name,
        fields=[_summarize_field(spec) for spec in schema.fields],
        invariants=[type(rule).__name__ for rule in schema.invariants],
    )


# ─── Endpoints ───


@router.get("/schemas", response_model=list[SchemaSummary])
async def list_catalog():
    """List every request schema with its fields."""
    return [_summarize(schema) for schema in SCHEMAS.values()]


@router.get("/schemas/{name}", response_model=SchemaSummary)
async def get_catalog_schema(name: str):
    """Describe one request schema."""
    try:
        return _summarize(get_schema(name))
    except UnknownSchemaError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/schemas/{name}/validate",
    response_model=ValidatedPayloadResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
async def validate_payload(name: str, request: Request):
    """Validate a JSON body against a named schema without running any handler.

    Returns the normalized payload on success, or the standard 400 error body.
    """
    try:
        schema = get_schema(name)
    except UnknownSchemaError as e:
        raise HTTPException(status_code=404, detail=str(e))

    body = await read_json_body(request)
    value = run_validation(schema, RequestPart.BODY, FastAPIRequestParts(request, body))

    logger.debug("dry_run_accepted", schema=name, fields=list(value.keys()))
    return ValidatedPayloadResponse(schema_name=name, value=value)
