"""Schema model — FieldSpec and Schema, plus small builders used by the catalog.

Schemas are built once at import time and never mutated. Structural mistakes
(duplicate fields, dangling references) raise SchemaDefinitionError right away
so they surface at startup rather than per request.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from permitgate.validators.base import BaseConstraint
from permitgate.validators.constraints import GreaterThan, RequiredWhen
from permitgate.validators.conversions import FieldType
from permitgate.validators.errors import SchemaDefinitionError


class FieldSpec(BaseModel):
    """One declared field: type, requiredness, constraints and message overrides."""

    name: str
    type: FieldType
    required: bool = False
    trim: bool = False
    constraints: tuple[BaseConstraint, ...] = ()
    items: Optional["FieldSpec"] = None  # Element spec for ARRAY fields
    messages: dict[str, str] = Field(default_factory=dict)
    label: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def display_label(self) -> str:
        return self.label or self.name

    @property
    def references(self) -> tuple[str, ...]:
        """Sibling fields any of this field's constraints read."""
        refs: list[str] = []
        for constraint in self.constraints:
            for ref in constraint.references:
                if ref not in refs:
                    refs.append(ref)
        return tuple(refs)

    @property
    def is_dependent(self) -> bool:
        return bool(self.references)

    @property
    def conditions(self) -> tuple[RequiredWhen, ...]:
        return tuple(c for c in self.constraints if isinstance(c, RequiredWhen))

    @property
    def value_constraints(self) -> tuple[BaseConstraint, ...]:
        """Constraints checked against a present value, in declared order."""
        return tuple(c for c in self.constraints if not isinstance(c, RequiredWhen))


class Schema(BaseModel):
    """A named, ordered set of FieldSpecs plus object-level invariants."""

    name: str
    fields: tuple[FieldSpec, ...]
    invariants: tuple[BaseConstraint, ...] = ()
    messages: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_definition(self) -> "Schema":
        seen: dict[str, FieldSpec] = {}
        for spec in self.fields:
            if spec.name in seen:
                raise SchemaDefinitionError(f"Schema '{self.name}' declares '{spec.name}' twice")
            seen[spec.name] = spec
            if spec.type == FieldType.ARRAY and spec.items is not None and spec.items.is_dependent:
                raise SchemaDefinitionError(
                    f"Schema '{self.name}': items of '{spec.name}' cannot reference sibling fields"
                )

        for spec in self.fields:
            for ref in spec.references:
                target = seen.get(ref)
                if target is None:
                    raise SchemaDefinitionError(
                        f"Schema '{self.name}': '{spec.name}' references undeclared field '{ref}'"
                    )
                if ref == spec.name:
                    raise SchemaDefinitionError(
                        f"Schema '{self.name}': '{spec.name}' references itself"
                    )
                if target.is_dependent:
                    raise SchemaDefinitionError(
                        f"Schema '{self.name}': '{spec.name}' references '{ref}', "
                        f"which itself depends on other fields"
                    )
            for constraint in spec.constraints:
                if isinstance(constraint, GreaterThan) and seen[constraint.ref].type != spec.type:
                    raise SchemaDefinitionError(
                        f"Schema '{self.name}': '{spec.name}' compares against "
                        f"'{constraint.ref}' of a different type"
                    )
            if spec.required and spec.conditions:
                raise SchemaDefinitionError(
                    f"Schema '{self.name}': '{spec.name}' is both required and conditionally required"
                )

        for invariant in self.invariants:
            if invariant.references:
                raise SchemaDefinitionError(
                    f"Schema '{self.name}': object invariants cannot reference fields"
                )
        return self

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def get_field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def direct_fields(self) -> tuple[FieldSpec, ...]:
        """Fields evaluated in the first pass."""
        return tuple(spec for spec in self.fields if not spec.is_dependent)

    @property
    def dependent_fields(self) -> tuple[FieldSpec, ...]:
        """Fields evaluated in the second pass, after their references are normalized."""
        return tuple(spec for spec in self.fields if spec.is_dependent)


# ── Builders ──


def _field(field_type: FieldType, name: str, *constraints: BaseConstraint, **options: Any) -> FieldSpec:
    return FieldSpec(name=name, type=field_type, constraints=constraints, **options)


def string_field(name: str, *constraints: BaseConstraint, **options: Any) -> FieldSpec:
    return _field(FieldType.STRING, name, *constraints, **options)


def number_field(name: str, *constraints: BaseConstraint, **options: Any) -> FieldSpec:
    return _field(FieldType.NUMBER, name, *constraints, **options)


def boolean_field(name: str, *constraints: BaseConstraint, **options: Any) -> FieldSpec:
    return _field(FieldType.BOOLEAN, name, *constraints, **options)


def date_field(name: str, *constraints: BaseConstraint, **options: Any) -> FieldSpec:
    return _field(FieldType.DATE, name, *constraints, **options)


def array_field(name: str, items: FieldSpec, *constraints: BaseConstraint, **options: Any) -> FieldSpec:
    return _field(FieldType.ARRAY, name, *constraints, items=items, **options)
