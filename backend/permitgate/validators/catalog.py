"""Schema catalog — one schema per API operation.

This is declarative data over the constraint vocabulary. Message text is
user-facing and kept verbatim; codes a field does not override fall back to
the default templates in ``messages.py``.
"""

import re

from permitgate.validators.constraints import (
    GreaterThan,
    Integer,
    Length,
    MinFields,
    MinItems,
    NumberRange,
    OneOf,
    Pattern,
    RequiredWhen,
)
from permitgate.validators.errors import UnknownSchemaError
from permitgate.validators.schema import (
    Schema,
    array_field,
    boolean_field,
    date_field,
    number_field,
    string_field,
)

# ──────────────────────────────────────────────────────────────────────
# DOMAIN VALUES
# ──────────────────────────────────────────────────────────────────────

HOSTELS: tuple[str, ...] = ("h1", "h2", "h3", "h4")

PURPOSE_MIN = 0
PURPOSE_MAX = 5

PERMIT_TYPE_OUT = 0
PERMIT_TYPE_IN = 1

PHONE_NUMBER_RE = re.compile(r"[0-9]{10}")

HOSTEL_MESSAGE = "Hostel must be one of: h1, h2, h3, h4"
PURPOSE_RANGE_MESSAGE = "Purpose must be between 0 and 5"


# ──────────────────────────────────────────────────────────────────────
# AUTHENTICATION
# ──────────────────────────────────────────────────────────────────────

login_schema = Schema(
    name="login",
    fields=(
        string_field(
            "id",
            Length(minimum=3, maximum=50),
            required=True,
            trim=True,
            messages={
                "string.empty": "ID is required",
                "string.min": "ID must be at least 3 characters",
                "string.max": "ID cannot exceed 50 characters",
                "any.required": "ID is required",
            },
        ),
        string_field(
            "password",
            Length(minimum=6, maximum=100),
            required=True,
            messages={
                "string.empty": "Password is required",
                "string.min": "Password must be at least 6 characters",
                "string.max": "Password cannot exceed 100 characters",
                "any.required": "Password is required",
            },
        ),
    ),
)


# ──────────────────────────────────────────────────────────────────────
# PERMITS
# ──────────────────────────────────────────────────────────────────────

create_permit_schema = Schema(
    name="createPermit",
    fields=(
        string_field(
            "id",
            required=True,
            trim=True,
            messages={
                "string.empty": "Student ID is required",
                "any.required": "Student ID is required",
            },
        ),
        string_field(
            "name",
            Length(minimum=2, maximum=100),
            required=True,
            trim=True,
            messages={
                "string.empty": "Name is required",
                "string.min": "Name must be at least 2 characters",
                "string.max": "Name cannot exceed 100 characters",
                "any.required": "Name is required",
            },
        ),
        string_field(
            "phoneNumber",
            Pattern(regex=PHONE_NUMBER_RE),
            required=True,
            messages={
                "string.empty": "Phone number is required",
                "string.pattern.base": "Phone number must be exactly 10 digits",
                "any.required": "Phone number is required",
            },
        ),
        date_field(
            "outTime",
            required=True,
            messages={
                "date.base": "Out time must be a valid date",
                "date.format": "Out time must be in ISO 8601 format",
                "any.required": "Out time is required",
            },
        ),
        date_field(
            "inTime",
            GreaterThan(ref="outTime"),
            required=True,
            messages={
                "date.base": "In time must be a valid date",
                "date.format": "In time must be in ISO 8601 format",
                "date.greater": "In time must be after out time",
                "any.required": "In time is required",
            },
        ),
        number_field(
            "purpose",
            Integer(),
            NumberRange(minimum=PURPOSE_MIN, maximum=PURPOSE_MAX),
            required=True,
            messages={
                "number.base": "Purpose must be a number",
                "number.integer": "Purpose must be an integer",
                "number.min": PURPOSE_RANGE_MESSAGE,
                "number.max": PURPOSE_RANGE_MESSAGE,
                "any.required": "Purpose is required",
            },
        ),
        string_field(
            "hostel",
            OneOf(values=HOSTELS),
            required=True,
            messages={
                "string.empty": "Hostel is required",
                "any.only": HOSTEL_MESSAGE,
                "any.required": "Hostel is required",
            },
        ),
    ),
)

# Partial update: every field optional, at least one must be supplied.
# The in/out ordering is only checked when both times are in the payload.
update_permit_schema = Schema(
    name="updatePermit",
    fields=(
        string_field("id", trim=True),
        string_field(
            "name",
            Length(minimum=2, maximum=100),
            trim=True,
            messages={
                "string.min": "Name must be at least 2 characters",
                "string.max": "Name cannot exceed 100 characters",
            },
        ),
        string_field(
            "phoneNumber",
            Pattern(regex=PHONE_NUMBER_RE),
            messages={
                "string.pattern.base": "Phone number must be exactly 10 digits",
            },
        ),
        date_field(
            "outTime",
            messages={
                "date.base": "Out time must be a valid date",
                "date.format": "Out time must be in ISO 8601 format",
            },
        ),
        date_field(
            "inTime",
            GreaterThan(ref="outTime"),
            messages={
                "date.base": "In time must be a valid date",
                "date.format": "In time must be in ISO 8601 format",
                "date.greater": "In time must be after out time",
            },
        ),
        number_field(
            "purpose",
            Integer(),
            NumberRange(minimum=PURPOSE_MIN, maximum=PURPOSE_MAX),
            messages={
                "number.base": "Purpose must be a number",
                "number.integer": "Purpose must be an integer",
                "number.min": PURPOSE_RANGE_MESSAGE,
                "number.max": PURPOSE_RANGE_MESSAGE,
            },
        ),
        string_field(
            "hostel",
            OneOf(values=HOSTELS),
            messages={
                "any.only": HOSTEL_MESSAGE,
            },
        ),
    ),
    invariants=(MinFields(limit=1),),
    messages={
        "object.min": "At least one field must be provided for update",
    },
)

verify_permit_schema = Schema(
    name="verifyPermit",
    fields=(
        string_field(
            "id",
            required=True,
            messages={
                "string.empty": "Permit ID is required",
                "any.required": "Permit ID is required",
            },
        ),
        number_field(
            "type",
            Integer(),
            OneOf(values=(PERMIT_TYPE_OUT, PERMIT_TYPE_IN)),
            required=True,
            messages={
                "number.base": "Type must be a number",
                "any.only": "Type must be 0 (out) or 1 (in)",
                "any.required": "Type is required",
            },
        ),
        string_field(
            "inApprovedBy",
            RequiredWhen(ref="type", equals=PERMIT_TYPE_IN),
            messages={
                "any.required": "In approved by is required when type is 1",
            },
        ),
        string_field(
            "outApprovedBy",
            RequiredWhen(ref="type", equals=PERMIT_TYPE_OUT),
            messages={
                "any.required": "Out approved by is required when type is 0",
            },
        ),
    ),
)


# ──────────────────────────────────────────────────────────────────────
# STUDENT MANAGEMENT
# ──────────────────────────────────────────────────────────────────────

remark_schema = Schema(
    name="remark",
    fields=(
        string_field(
            "id",
            required=True,
            trim=True,
            messages={
                "string.empty": "Student ID is required",
                "any.required": "Student ID is required",
            },
        ),
    ),
)

set_status_schema = Schema(
    name="setStatus",
    fields=(
        array_field(
            "id",
            string_field("id", trim=True),
            MinItems(limit=1),
            required=True,
            messages={
                "array.base": "ID must be an array",
                "array.min": "At least one student ID is required",
                "any.required": "Student IDs are required",
            },
        ),
        boolean_field(
            "status",
            required=True,
            messages={
                "boolean.base": "Status must be a boolean",
                "any.required": "Status is required",
            },
        ),
    ),
)

outgoing_students_schema = Schema(
    name="outgoingStudents",
    fields=(
        date_field(
            "date",
            required=True,
            messages={
                "date.base": "Date must be a valid date",
                "date.format": "Date must be in ISO 8601 format",
                "any.required": "Date is required",
            },
        ),
        string_field(
            "hostel",
            OneOf(values=HOSTELS),
            messages={
                "any.only": HOSTEL_MESSAGE,
            },
        ),
    ),
)


# ──────────────────────────────────────────────────────────────────────
# PATH PARAMETERS
# ──────────────────────────────────────────────────────────────────────

id_param_schema = Schema(
    name="idParam",
    fields=(
        string_field(
            "id",
            required=True,
            trim=True,
            messages={
                "string.empty": "ID parameter is required",
                "any.required": "ID parameter is required",
            },
        ),
    ),
)

hostel_param_schema = Schema(
    name="hostelParam",
    fields=(
        string_field(
            "hostel",
            OneOf(values=HOSTELS),
            required=True,
            messages={
                "string.empty": "Hostel parameter is required",
                "any.only": HOSTEL_MESSAGE,
                "any.required": "Hostel parameter is required",
            },
        ),
    ),
)


# ──────────────────────────────────────────────────────────────────────
# REGISTRY
# ──────────────────────────────────────────────────────────────────────

SCHEMAS: dict[str, Schema] = {
    schema.name: schema
    for schema in (
        login_schema,
        create_permit_schema,
        update_permit_schema,
        verify_permit_schema,
        remark_schema,
        set_status_schema,
        outgoing_students_schema,
        id_param_schema,
        hostel_param_schema,
    )
}


def get_schema(name: str) -> Schema:
    """Look up a catalog schema by its operation name.

    Raises:
        UnknownSchemaError: if no schema is registered under ``name``
    """
    try:
        return SCHEMAS[name]
    except KeyError:
        raise UnknownSchemaError(name) from None


def list_schemas() -> list[str]:
    """List all catalog schema names in declaration order."""
    return list(SCHEMAS.keys())
