"""Validation adapter — the contract between the request pipeline and the engine.

The adapter knows nothing about any web framework. The pipeline hands it an
object with four capabilities (read a part, write a part, reject with a
status and body) and the adapter either replaces the part with the
normalized value or rejects the request with a 400.
"""

from enum import Enum
from typing import Any, Optional, Protocol, Sequence, Union

from permitgate.validators.engine import ValidationEngine, validation_engine
from permitgate.validators.models import ValidationOptions, ValidationOutcome, Violation
from permitgate.validators.schema import Schema

VALIDATION_ERROR_STATUS = 400
VALIDATION_ERROR = "Validation Error"
VALIDATION_ERROR_MESSAGE = "Invalid request data"


class RequestPart(str, Enum):
    """Which part of an incoming request to validate."""

    BODY = "body"
    QUERY = "query"
    PARAMS = "params"


class RequestCapabilities(Protocol):
    """What the adapter needs from the host pipeline's request/response pair."""

    def read(self, part: RequestPart) -> Any:
        """Return the raw content of ``part``."""
        ...

    def write(self, part: RequestPart, value: dict) -> None:
        """Replace ``part`` with the normalized value."""
        ...

    def reject(self, status_code: int, body: dict) -> None:
        """Set the response and stop the pipeline. Business handlers must not run."""
        ...


def build_error_body(violations: Sequence[Violation]) -> dict:
    """Shape violations into the stable 400 response body."""
    return {
        "error": VALIDATION_ERROR,
        "message": VALIDATION_ERROR_MESSAGE,
        "details": [
            {"field": v.field, "message": v.message, "type": v.kind}
            for v in violations
        ],
    }


def format_validation_error(violations: Sequence[Violation]) -> dict:
    """Same shape as the response body, with each offending value attached.

    Meant for logs and diagnostics; the values may not be JSON-serializable.
    """
    body = build_error_body(violations)
    for detail, violation in zip(body["details"], violations):
        detail["value"] = violation.value
    return body


class ValidationAdapter:
    """Runs a schema against one part of a request and applies the result."""

    def __init__(
        self,
        engine: Optional[ValidationEngine] = None,
        options: Optional[ValidationOptions] = None,
    ):
        self.engine = engine or validation_engine
        self.options = options

    def validate_request(
        self,
        schema: Schema,
        source: Union[RequestPart, str],
        request: RequestCapabilities,
    ) -> ValidationOutcome:
        """Validate ``source`` of ``request`` against ``schema``.

        On acceptance the part is replaced with the normalized value. On
        rejection ``request.reject`` is called with a 400 and the error body.

        Returns:
            The ValidationOutcome, for callers that want to inspect it
        """
        part = RequestPart(source)
        outcome = self.engine.evaluate(schema, request.read(part), self.options)

        if outcome.accepted:
            request.write(part, outcome.value)
        else:
            request.reject(VALIDATION_ERROR_STATUS, build_error_body(outcome.violations))

        return outcome


# Module-level singleton
validation_adapter = ValidationAdapter()


def validate_request(
    schema: Schema,
    source: Union[RequestPart, str],
    request: RequestCapabilities,
) -> ValidationOutcome:
    """Validate with the shared adapter and default options."""
    return validation_adapter.validate_request(schema, source, request)
