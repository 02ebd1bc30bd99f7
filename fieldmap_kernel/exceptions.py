"""
Typed exception hierarchy for fieldmap.

Every error carries a ``code`` class attribute (machine-readable, stable
across message rewording) and stores its context as attributes, so a
diagnostic can be logged or serialized without parsing the message.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    FieldMapError (base)
    |
    +-- SchemaError
    |   +-- EntityNotFoundError
    |   +-- FieldNotFoundError
    |   +-- SchemaAlreadyRegisteredError
    |
    +-- AssignmentError
    |   +-- FieldNotWritableError
    |
    +-- ConversionError
        +-- InvalidDateError
        +-- InvalidDatetimeError
        +-- InvalidDecimalError
        +-- InvalidBooleanError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                       | When Raised
------------|----------------------------|-------------------------------------
Schema      | ENTITY_NOT_FOUND           | Entity type not in the schema
            | FIELD_NOT_FOUND            | Entity has no field with that name
            | SCHEMA_ALREADY_REGISTERED  | Duplicate entity registration
------------|----------------------------|-------------------------------------
Assignment  | ASSIGNMENT_ERROR           | Record rejected the write
            | FIELD_NOT_WRITABLE         | Field is read-only/calculated/system
------------|----------------------------|-------------------------------------
Conversion  | INVALID_DATE               | Not a YYYY-MM-DD calendar date
            | INVALID_DATETIME           | Not an ISO 8601 date and time
            | INVALID_DECIMAL            | Not a finite decimal number
            | INVALID_BOOLEAN            | Not "true" or "false"

===============================================================================
HANDLING
===============================================================================

Converters and schema lookups RAISE these errors. FieldAssigner is the only
place that catches them: it turns every one of them into a logged, contained
failure so that a bad field never aborts the caller's loop.

    try:
        value = convert(raw, "date")
    except ConversionError as e:
        log.warning("bad value", extra={"code": e.code, "raw": e.raw_value})
"""


class FieldMapError(Exception):
    """
    Base exception for all fieldmap errors.

    All subclasses must have a `code` class attribute.
    """

    code: str = "FIELDMAP_ERROR"


# Schema lookup


class SchemaError(FieldMapError):
    """Base exception for metadata lookup failures."""

    code: str = "SCHEMA_ERROR"


class EntityNotFoundError(SchemaError):
    """No entity type registered under the given name."""

    code: str = "ENTITY_NOT_FOUND"

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        super().__init__(f"Entity type not found: {entity_name}")


class FieldNotFoundError(SchemaError):
    """Entity type exists but has no field with the given name."""

    code: str = "FIELD_NOT_FOUND"

    def __init__(self, entity_name: str, field_name: str):
        self.entity_name = entity_name
        self.field_name = field_name
        super().__init__(f"Field not found: {entity_name}.{field_name}")


class SchemaAlreadyRegisteredError(SchemaError):
    """Entity type already registered."""

    code: str = "SCHEMA_ALREADY_REGISTERED"

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        super().__init__(f"Entity type already registered: {entity_name}")


# Assignment


class AssignmentError(FieldMapError):
    """The record could not accept the value."""

    code: str = "ASSIGNMENT_ERROR"


class FieldNotWritableError(AssignmentError):
    """Field exists but cannot be set through normal write access."""

    code: str = "FIELD_NOT_WRITABLE"

    def __init__(self, entity_name: str, field_name: str):
        self.entity_name = entity_name
        self.field_name = field_name
        super().__init__(f"Field is not writable: {entity_name}.{field_name}")


# Conversion


class ConversionError(FieldMapError):
    """Raw text cannot be parsed into the field's declared type."""

    code: str = "CONVERSION_ERROR"
    expected: str = "a valid value"

    def __init__(self, raw_value: str, type_tag: str):
        self.raw_value = raw_value
        self.type_tag = type_tag
        super().__init__(
            f"Cannot convert {raw_value!r} to {type_tag}: expected {self.expected}"
        )


class InvalidDateError(ConversionError):
    code: str = "INVALID_DATE"
    expected: str = "YYYY-MM-DD"


class InvalidDatetimeError(ConversionError):
    code: str = "INVALID_DATETIME"
    expected: str = "YYYY-MM-DD HH:MM[:SS] with optional offset"


class InvalidDecimalError(ConversionError):
    code: str = "INVALID_DECIMAL"
    expected: str = "a finite decimal number"


class InvalidBooleanError(ConversionError):
    code: str = "INVALID_BOOLEAN"
    expected: str = "'true' or 'false'"
