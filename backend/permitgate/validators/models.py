"""Validation models — violation kinds, violations, options, and outcomes.

All validation is deterministic: same schema + same input → same outcome,
with violations in field declaration order.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ViolationKind(str, Enum):
    """Coarse classification of a failed constraint."""

    PRESENCE = "presence"                          # Required field missing or empty
    TYPE_MISMATCH = "type_mismatch"                # Cannot be coerced to the declared type
    RANGE_VIOLATION = "range_violation"            # Length, count or numeric bound exceeded
    PATTERN_MISMATCH = "pattern_mismatch"          # Regex failure
    ENUM_VIOLATION = "enum_violation"              # Not in the allowed set
    FORMAT_VIOLATION = "format_violation"          # Date not in ISO 8601
    ORDERING_VIOLATION = "ordering_violation"      # Cross-field comparison failed
    CONDITIONAL_PRESENCE = "conditional_presence"  # Required because of a sibling's value
    OBJECT_INVARIANT = "object_invariant_violation"


class Violation(BaseModel):
    """A single failed constraint."""

    field: str                  # Dotted path, "" for object-level rules
    message: str
    kind: ViolationKind
    code: str                   # Message key, e.g. "string.min"
    value: Optional[Any] = None # Offending value, when there is one

    class Config:
        use_enum_values = True
        frozen = True


class ValidationOptions(BaseModel):
    """Knobs recognized by the engine."""

    strip_unknown: bool = Field(default=True, description="Drop undeclared keys from the output")
    convert: bool = Field(default=True, description="Coerce numeric/date/boolean strings and trim")
    abort_early: bool = Field(default=False, description="Stop at the first violation")

    model_config = {"frozen": True}


class ValidationOutcome(BaseModel):
    """Result of one evaluation: accepted with a value, or rejected with violations."""

    accepted: bool
    value: Optional[dict] = None
    violations: list[Violation] = Field(default_factory=list)

    @classmethod
    def accept(cls, value: dict) -> "ValidationOutcome":
        return cls(accepted=True, value=value)

    @classmethod
    def reject(cls, violations: list[Violation]) -> "ValidationOutcome":
        """Build a rejection. The normalized value is never surfaced."""
        if not violations:
            raise ValueError("A rejected outcome needs at least one violation")
        return cls(accepted=False, violations=list(violations))

    @property
    def rejected(self) -> bool:
        return not self.accepted
