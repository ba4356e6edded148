"""Default message templates, keyed by violation code.

Schemas override these per field. Templates are rendered with ``str.format``;
``label`` is always available, other placeholders depend on the code.
"""

DEFAULT_MESSAGES: dict[str, str] = {
    # Presence
    "any.required": '"{label}" is required',
    "any.only": '"{label}" must be one of [{valids}]',

    # Strings
    "string.base": '"{label}" must be a string',
    "string.empty": '"{label}" is not allowed to be empty',
    "string.min": '"{label}" length must be at least {limit} characters long',
    "string.max": '"{label}" length must be less than or equal to {limit} characters long',
    "string.pattern.base": '"{label}" with value "{value}" fails to match the required pattern: {regex}',
    "string.trim": '"{label}" must not have leading or trailing whitespace',

    # Numbers
    "number.base": '"{label}" must be a number',
    "number.integer": '"{label}" must be an integer',
    "number.min": '"{label}" must be greater than or equal to {limit}',
    "number.max": '"{label}" must be less than or equal to {limit}',

    # Booleans
    "boolean.base": '"{label}" must be a boolean',

    # Dates
    "date.base": '"{label}" must be a valid date',
    "date.format": '"{label}" must be in ISO 8601 date format',
    "date.greater": '"{label}" must be greater than "ref:{limit}"',
    "date.future": '"{label}" must be a date in the future',
    "date.maxRange": '"{label}" must be within {max_days} days from now',

    # Arrays
    "array.base": '"{label}" must be an array',
    "array.min": '"{label}" must contain at least {limit} items',

    # Objects
    "object.base": '"{label}" must be of type object',
    "object.min": '"{label}" must have at least {limit} key',
}


def render(template: str, **context) -> str:
    """Fill a message template, leaving it untouched if a placeholder is missing."""
    try:
        return template.format(**context)
    except (KeyError, IndexError, ValueError):
        return template
