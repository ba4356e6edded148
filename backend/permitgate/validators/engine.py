"""Validation Engine — evaluates a Schema against a raw payload.

This is the main entry point for request validation. It converts every
declared field, runs its constraints, applies the object-level invariants,
and produces either an accepted normalized value or the full list of
violations.

Usage:
    engine = ValidationEngine()
    outcome = engine.evaluate(schema, payload)
    if outcome.rejected:
        # Respond 400 with outcome.violations
"""

from typing import Any, Mapping, Optional

from permitgate.validators.base import EvaluationContext
from permitgate.validators.conversions import ConversionFailed, convert_value
from permitgate.validators.models import (
    ValidationOptions,
    ValidationOutcome,
    Violation,
    ViolationKind,
)
from permitgate.validators.schema import FieldSpec, Schema

OBJECT_LABEL = "value"


class ValidationEngine:
    """Interprets schemas. Holds no per-call state, so one instance serves all requests.

    Evaluation order:
        1. Direct fields (no sibling references), in declaration order
        2. Dependent fields, whose rules read the normalized siblings from pass 1
        3. Object-level invariants, against the normalized output so far

    Violations are always reported in field declaration order, whatever the pass.
    """

    def __init__(self, options: Optional[ValidationOptions] = None):
        """Initialize with default options.

        Args:
            options: Defaults for calls that don't pass their own. If None, uses
                strip_unknown=True, convert=True, abort_early=False.
        """
        self.options = options or ValidationOptions()

    def evaluate(
        self,
        schema: Schema,
        data: Any,
        options: Optional[ValidationOptions] = None,
    ) -> ValidationOutcome:
        """Validate ``data`` against ``schema``.

        Args:
            schema: The schema to apply
            data: Raw key-value payload; unknown keys are permitted
            options: Per-call options, falling back to the engine defaults

        Returns:
            ValidationOutcome, accepted with the normalized value or rejected
            with every violation found
        """
        options = options or self.options
        object_ctx = EvaluationContext(path="", label=OBJECT_LABEL, messages=schema.messages)

        if not isinstance(data, Mapping):
            return ValidationOutcome.reject([
                object_ctx.violation("object.base", ViolationKind.TYPE_MISMATCH, data),
            ])

        normalized: dict[str, Any] = {}
        by_field: dict[str, list[Violation]] = {}
        evaluated: set[str] = set()

        for spec in schema.direct_fields + schema.dependent_fields:
            violations = self._evaluate_field(spec, data, normalized, options)
            evaluated.add(spec.name)
            if violations:
                by_field[spec.name] = violations
            if options.abort_early and by_field:
                first = self._first_settled(schema, evaluated, by_field)
                if first is not None:
                    return ValidationOutcome.reject(first[:1])

        ordered = [v for spec in schema.fields for v in by_field.get(spec.name, [])]

        object_ctx.siblings = normalized
        for invariant in schema.invariants:
            failures = invariant.check(normalized, object_ctx)
            if failures and options.abort_early:
                return ValidationOutcome.reject(failures[:1])
            ordered.extend(failures)

        if ordered:
            return ValidationOutcome.reject(ordered)

        return ValidationOutcome.accept(self._build_output(schema, data, normalized, options))

    # ── Field evaluation ──

    def _evaluate_field(
        self,
        spec: FieldSpec,
        data: Mapping[str, Any],
        normalized: dict[str, Any],
        options: ValidationOptions,
    ) -> list[Violation]:
        """Evaluate one top-level field, writing it to ``normalized`` only if it passes."""
        ctx = EvaluationContext(
            path=spec.name,
            label=spec.display_label,
            messages=spec.messages,
            siblings=normalized,
        )

        if spec.name not in data:
            if spec.required:
                return [ctx.violation("any.required", ViolationKind.PRESENCE)]
            for condition in spec.conditions:
                if condition.applies(ctx):
                    return [ctx.violation("any.required", ViolationKind.CONDITIONAL_PRESENCE)]
            return []

        value, violations = self._check_value(spec, data[spec.name], ctx, options)
        if not violations:
            normalized[spec.name] = value
        return violations

    def _check_value(
        self,
        spec: FieldSpec,
        raw: Any,
        ctx: EvaluationContext,
        options: ValidationOptions,
    ) -> tuple[Any, list[Violation]]:
        """Convert a present value, then run every value constraint on it."""
        try:
            value = convert_value(spec.type, raw, convert=options.convert, trim=spec.trim)
        except ConversionFailed as failure:
            return None, [ctx.violation(failure.code, failure.kind, raw, **failure.params)]

        violations: list[Violation] = []
        if spec.items is not None:
            value, item_violations = self._check_items(spec.items, value, ctx, options)
            violations.extend(item_violations)

        for constraint in spec.value_constraints:
            violations.extend(constraint.check(value, ctx))

        return value, violations

    def _check_items(
        self,
        item_spec: FieldSpec,
        values: list,
        parent: EvaluationContext,
        options: ValidationOptions,
    ) -> tuple[list, list[Violation]]:
        converted: list = []
        violations: list[Violation] = []
        for index, raw in enumerate(values):
            item_ctx = EvaluationContext(
                path=f"{parent.path}.{index}",
                label=f"{parent.label}[{index}]",
                messages=item_spec.messages,
                siblings=parent.siblings,
            )
            value, item_violations = self._check_value(item_spec, raw, item_ctx, options)
            converted.append(value)
            violations.extend(item_violations)
        return converted, violations

    @staticmethod
    def _build_output(
        schema: Schema,
        data: Mapping[str, Any],
        normalized: dict[str, Any],
        options: ValidationOptions,
    ) -> dict[str, Any]:
        output = {name: normalized[name] for name in schema.field_names if name in normalized}
        if not options.strip_unknown:
            declared = set(schema.field_names)
            for key, value in data.items():
                if key not in declared:
                    output[key] = value
        return output

    @staticmethod
    def _first_settled(
        schema: Schema,
        evaluated: set[str],
        by_field: dict[str, list[Violation]],
    ) -> Optional[list[Violation]]:
        """Violations of the earliest declared failing field, once every field before it has run."""
        for name in schema.field_names:
            if name not in evaluated:
                return None
            if name in by_field:
                return by_field[name]
        return None


# Module-level singleton
validation_engine = ValidationEngine()


def evaluate(schema: Schema, data: Any, options: Optional[ValidationOptions] = None) -> ValidationOutcome:
    """Evaluate with the shared engine."""
    return validation_engine.evaluate(schema, data, options)
