"""Constraint vocabulary — the closed set of rules a FieldSpec can carry.

Each class is an immutable pydantic model; the engine only relies on the
BaseConstraint contract (kind, references, check).
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from permitgate.validators.base import BaseConstraint, EvaluationContext
from permitgate.validators.models import Violation, ViolationKind


class Length(BaseConstraint):
    """String length bounds, inclusive."""

    minimum: Optional[int] = None
    maximum: Optional[int] = None

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.RANGE_VIOLATION

    def check(self, value: str, ctx: EvaluationContext) -> list[Violation]:
        if self.minimum is not None and len(value) < self.minimum:
            return self._fail(ctx, "string.min", value, limit=self.minimum)
        if self.maximum is not None and len(value) > self.maximum:
            return self._fail(ctx, "string.max", value, limit=self.maximum)
        return []


class Pattern(BaseConstraint):
    """Whole string must match a regular expression."""

    regex: re.Pattern

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.PATTERN_MISMATCH

    def check(self, value: str, ctx: EvaluationContext) -> list[Violation]:
        if self.regex.fullmatch(value):
            return []
        return self._fail(ctx, "string.pattern.base", value, regex=self.regex.pattern)


class OneOf(BaseConstraint):
    """Value must be one of an allowed set."""

    values: tuple[Any, ...]

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.ENUM_VIOLATION

    def check(self, value: Any, ctx: EvaluationContext) -> list[Violation]:
        if value in self.values:
            return []
        valids = ", ".join(str(v) for v in self.values)
        return self._fail(ctx, "any.only", value, valids=valids)


class Integer(BaseConstraint):
    """Number must be integral."""

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.TYPE_MISMATCH

    def check(self, value: float | int, ctx: EvaluationContext) -> list[Violation]:
        if isinstance(value, int) or float(value).is_integer():
            return []
        return self._fail(ctx, "number.integer", value)


class NumberRange(BaseConstraint):
    """Numeric bounds, inclusive."""

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.RANGE_VIOLATION

    def check(self, value: float | int, ctx: EvaluationContext) -> list[Violation]:
        if self.minimum is not None and value < self.minimum:
            return self._fail(ctx, "number.min", value, limit=_plain(self.minimum))
        if self.maximum is not None and value > self.maximum:
            return self._fail(ctx, "number.max", value, limit=_plain(self.maximum))
        return []


class MinItems(BaseConstraint):
    """List must hold at least ``limit`` elements."""

    limit: int

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.RANGE_VIOLATION

    def check(self, value: list, ctx: EvaluationContext) -> list[Violation]:
        if len(value) >= self.limit:
            return []
        return self._fail(ctx, "array.min", value, limit=self.limit)


class GreaterThan(BaseConstraint):
    """Value must be strictly greater than a sibling field's normalized value.

    When the sibling is absent or failed its own checks there is nothing to
    compare against and the constraint passes; the sibling reports its own error.
    """

    ref: str

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.ORDERING_VIOLATION

    @property
    def references(self) -> tuple[str, ...]:
        return (self.ref,)

    def check(self, value: Any, ctx: EvaluationContext) -> list[Violation]:
        if not ctx.has_sibling(self.ref):
            return []
        if value > ctx.sibling(self.ref):
            return []
        return self._fail(ctx, "date.greater", value, limit=self.ref)


class RequiredWhen(BaseConstraint):
    """Makes an otherwise optional field required when a sibling equals ``equals``.

    Only consulted by the engine when the field is absent; a present value
    always passes.
    """

    ref: str
    equals: Any

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.CONDITIONAL_PRESENCE

    @property
    def references(self) -> tuple[str, ...]:
        return (self.ref,)

    def applies(self, ctx: EvaluationContext) -> bool:
        return ctx.has_sibling(self.ref) and ctx.sibling(self.ref) == self.equals

    def check(self, value: Any, ctx: EvaluationContext) -> list[Violation]:
        return []


class FutureDate(BaseConstraint):
    """Date must be after the current time."""

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.RANGE_VIOLATION

    def check(self, value: datetime, ctx: EvaluationContext) -> list[Violation]:
        if value > datetime.now(timezone.utc):
            return []
        return self._fail(ctx, "date.future", value)


class WithinDays(BaseConstraint):
    """Date must not be more than ``max_days`` days ahead of the current time."""

    max_days: int = 30

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.RANGE_VIOLATION

    def check(self, value: datetime, ctx: EvaluationContext) -> list[Violation]:
        latest = datetime.now(timezone.utc) + timedelta(days=self.max_days)
        if value <= latest:
            return []
        return self._fail(ctx, "date.maxRange", value, max_days=self.max_days)


class MinFields(BaseConstraint):
    """Object-level rule: the normalized output must hold at least ``limit`` fields."""

    limit: int = 1

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.OBJECT_INVARIANT

    def check(self, value: dict, ctx: EvaluationContext) -> list[Violation]:
        if len(value) >= self.limit:
            return []
        # The whole object is the offending value; keep the violation small
        return self._fail(ctx, "object.min", None, limit=self.limit)


def _plain(number: float) -> float | int:
    """Render 5.0 as 5 in messages."""
    return int(number) if float(number).is_integer() else number
