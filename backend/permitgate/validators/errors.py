"""Exceptions raised by the validation layer.

Violations are never raised; they are returned as data inside a
ValidationOutcome. These exceptions signal programming errors or lookups.
"""


class SchemaDefinitionError(Exception):
    """A schema is malformed. Raised while the schema is being built, at import time."""


class UnknownSchemaError(KeyError):
    """No schema is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown schema '{self.name}'"
