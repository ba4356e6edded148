"""FastAPI binding for the validation adapter.

Routes declare what they accept with the ``validated`` dependency:

    @router.post("/permits")
    async def create_permit(payload: dict = Depends(validated(create_permit_schema))):
        ...

The dependency returns the normalized payload, or stops the request with a
400 before the handler runs.
"""

import json
from typing import Any, Union

import structlog
from fastapi import Request

from permitgate.config import get_settings
from permitgate.validators.adapter import RequestPart, ValidationAdapter
from permitgate.validators.schema import Schema

logger = structlog.get_logger()


class RequestRejected(Exception):
    """Stops the pipeline. Turned into a JSON response by the handler in main.py."""

    def __init__(self, status_code: int, body: dict):
        super().__init__(body.get("message", "Request rejected"))
        self.status_code = status_code
        self.body = body


class FastAPIRequestParts:
    """Request capabilities over a Starlette request.

    The body must be read (awaited) before validation, so it is passed in.
    Query and path parameters are copied into plain dicts.
    """

    def __init__(self, request: Request, body: Any = None):
        self.request = request
        self._parts: dict[RequestPart, Any] = {
            RequestPart.BODY: body,
            RequestPart.QUERY: dict(request.query_params),
            RequestPart.PARAMS: dict(request.path_params),
        }

    def read(self, part: RequestPart) -> Any:
        return self._parts[part]

    def write(self, part: RequestPart, value: dict) -> None:
        self._parts[part] = value
        validated = getattr(self.request.state, "validated", None) or {}
        validated[part.value] = value
        self.request.state.validated = validated

    def reject(self, status_code: int, body: dict) -> None:
        raise RequestRejected(status_code, body)


async def read_json_body(request: Request) -> Any:
    """Read the request body as JSON.

    An empty body reads as ``{}``. A body that is not JSON is returned as
    text, which the engine rejects as not being an object.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


def run_validation(schema: Schema, part: RequestPart, parts: FastAPIRequestParts) -> dict:
    """Validate one part of the request and return its normalized value.

    Raises:
        RequestRejected: when the payload fails validation
    """
    adapter = ValidationAdapter(options=get_settings().validation_options())
    try:
        adapter.validate_request(schema, part, parts)
    except RequestRejected as exc:
        logger.info(
            "validation_rejected",
            schema=schema.name,
            source=part.value,
            path=parts.request.url.path,
            method=parts.request.method,
            violations=len(exc.body.get("details", [])),
            fields=sorted({d["field"] for d in exc.body.get("details", [])}),
        )
        raise
    return parts.read(part)


def validated(schema: Schema, source: Union[RequestPart, str] = RequestPart.BODY):
    """Build a FastAPI dependency that validates ``source`` against ``schema``.

    Args:
        schema: Catalog schema for the operation
        source: "body", "query" or "params"

    Returns:
        An async dependency yielding the normalized payload
    """
    part = RequestPart(source)

    async def dependency(request: Request) -> dict:
        body = await read_json_body(request) if part == RequestPart.BODY else None
        return run_validation(schema, part, FastAPIRequestParts(request, body))

    dependency.__name__ = f"validate_{schema.name}_{part.value}"
    return dependency
