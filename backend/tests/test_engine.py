"""Tests for the validation engine: algorithm, options, and pass ordering."""

from permitgate.validators import ValidationEngine, ValidationOptions, evaluate, get_schema
from permitgate.validators.constraints import GreaterThan, Length, NumberRange, RequiredWhen
from permitgate.validators.schema import Schema, date_field, number_field, string_field


def _forward_reference_schema() -> Schema:
    """'end' is declared before the field it compares against."""
    return Schema(
        name="window",
        fields=(
            date_field("end", GreaterThan(ref="start"), required=True),
            number_field("slots", NumberRange(minimum=1)),
            date_field("start", required=True),
        ),
    )


class TestOutcome:

    def test_rejection_discards_partial_value(self, engine):
        outcome = engine.evaluate(get_schema("login"), {"id": "stu123", "password": "123"})
        assert outcome.rejected
        assert outcome.value is None

    def test_non_mapping_payload(self, engine):
        outcome = engine.evaluate(get_schema("login"), ["stu123", "secret123"])
        assert len(outcome.violations) == 1
        violation = outcome.violations[0]
        assert violation.field == ""
        assert violation.kind == "type_mismatch"
        assert violation.code == "object.base"
        assert violation.message == '"value" must be of type object'

    def test_violation_carries_offending_value(self, engine):
        outcome = engine.evaluate(get_schema("hostelParam"), {"hostel": "h7"})
        assert outcome.violations[0].value == "h7"

    def test_module_level_evaluate_uses_shared_engine(self):
        assert evaluate(get_schema("remark"), {"id": " x "}).value == {"id": "x"}

    def test_absent_optional_field_not_in_output(self, engine):
        outcome = engine.evaluate(get_schema("verifyPermit"), {"id": "P-1", "type": 1, "inApprovedBy": "w"})
        assert "outApprovedBy" not in outcome.value


class TestOptions:

    def test_keep_unknown_fields(self):
        engine = ValidationEngine(ValidationOptions(strip_unknown=False))
        outcome = engine.evaluate(get_schema("remark"), {"id": " s1 ", "note": "late"})
        assert outcome.value == {"id": "s1", "note": "late"}

    def test_without_conversion_numeric_strings_fail(self, engine, permit_payload):
        permit_payload["purpose"] = "2"
        outcome = engine.evaluate(get_schema("createPermit"), permit_payload, ValidationOptions(convert=False))
        assert "Purpose must be a number" in [v.message for v in outcome.violations]

    def test_without_conversion_untrimmed_string_fails(self, engine):
        outcome = engine.evaluate(get_schema("remark"), {"id": " s1 "}, ValidationOptions(convert=False))
        assert [v.code for v in outcome.violations] == ["string.trim"]

    def test_without_conversion_normalized_value_still_passes(self, engine, permit_payload):
        normalized = engine.evaluate(get_schema("createPermit"), permit_payload).value
        outcome = engine.evaluate(get_schema("createPermit"), normalized, ValidationOptions(convert=False))
        assert outcome.accepted
        assert outcome.value == normalized

    def test_abort_early_returns_first_violation(self, engine):
        outcome = engine.evaluate(
            get_schema("login"),
            {"id": "a", "password": "b"},
            ValidationOptions(abort_early=True),
        )
        assert [v.field for v in outcome.violations] == ["id"]

    def test_abort_early_follows_declaration_order(self, engine, permit_payload):
        # inTime is declared before hostel but is evaluated in the second pass
        del permit_payload["inTime"]
        permit_payload["hostel"] = "h9"
        outcome = engine.evaluate(get_schema("createPermit"), permit_payload, ValidationOptions(abort_early=True))
        assert [v.field for v in outcome.violations] == ["inTime"]
        assert [v.kind for v in outcome.violations] == ["presence"]

    def test_abort_early_forward_reference(self, engine):
        outcome = engine.evaluate(
            _forward_reference_schema(),
            {"end": "2025-01-01T00:00:00Z", "slots": 0, "start": "2025-01-02T00:00:00Z"},
            ValidationOptions(abort_early=True),
        )
        assert [v.kind for v in outcome.violations] == ["ordering_violation"]

    def test_abort_early_on_invariant(self, engine):
        outcome = engine.evaluate(get_schema("updatePermit"), {}, ValidationOptions(abort_early=True))
        assert [v.kind for v in outcome.violations] == ["object_invariant_violation"]

    def test_collects_every_violation_by_default(self, engine):
        outcome = engine.evaluate(get_schema("login"), {"id": "a", "password": "b"})
        assert [v.field for v in outcome.violations] == ["id", "password"]


class TestTwoPassEvaluation:

    def test_forward_reference_resolved(self, engine):
        outcome = engine.evaluate(_forward_reference_schema(), {
            "end": "2025-01-02T00:00:00Z",
            "start": "2025-01-01T00:00:00Z",
        })
        assert outcome.accepted
        assert list(outcome.value) == ["end", "start"]

    def test_forward_reference_violation_keeps_declaration_order(self, engine):
        outcome = engine.evaluate(_forward_reference_schema(), {
            "end": "2025-01-01T00:00:00Z",
            "slots": 0,
            "start": "2025-01-02T00:00:00Z",
        })
        assert [v.field for v in outcome.violations] == ["end", "slots"]
        assert [v.kind for v in outcome.violations] == ["ordering_violation", "range_violation"]

    def test_reference_to_failed_field_is_skipped(self, engine):
        outcome = engine.evaluate(_forward_reference_schema(), {
            "end": "2025-01-01T00:00:00Z",
            "start": "soon",
        })
        assert [v.field for v in outcome.violations] == ["start"]

    def test_present_value_with_condition_still_checked(self, engine):
        schema = Schema(
            name="approval",
            fields=(
                number_field("type", required=True),
                string_field("approver", RequiredWhen(ref="type", equals=1), Length(minimum=3)),
            ),
        )
        outcome = engine.evaluate(schema, {"type": 1, "approver": "ab"})
        assert [v.code for v in outcome.violations] == ["string.min"]

    def test_every_failing_constraint_reported(self, engine):
        schema = Schema(
            name="code",
            fields=(
                string_field("code", Length(minimum=5), Length(maximum=2), required=True),
            ),
        )
        outcome = engine.evaluate(schema, {"code": "abc"})
        assert [v.code for v in outcome.violations] == ["string.min", "string.max"]
