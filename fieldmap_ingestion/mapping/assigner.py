"""
FieldAssigner: metadata-driven assignment of one raw string to one field.

Contract:
    assign(record, raw_value, entity_name, field_name) -> None

    Looks up the field's declared type in the injected Schema, converts the
    trimmed value through the converter table, and writes it into the record.

NEVER RAISES.
    Every failure (unknown entity or field, read-only field, unparsable
    value, record rejecting the write) is contained: the record keeps its
    prior value and exactly one WARNING diagnostic is logged with the
    field name, the raw value and the failure message. A blank value is not
    a failure and logs nothing. This lets callers run long loops of field
    assignments where one bad field must not abort the rest.

    Callers that need the outcome use apply(), which returns an
    AssignmentResult instead of discarding it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fieldmap_kernel.domain.dtos import (
    AssignmentResult,
    AssignmentStatus,
    ValidationError,
)
from fieldmap_kernel.domain.records import write_field
from fieldmap_kernel.domain.schemas.registry import Schema, describe_field
from fieldmap_kernel.exceptions import AssignmentError, FieldNotWritableError
from fieldmap_kernel.logging_config import LogContext, get_logger
from fieldmap_ingestion.mapping.engine import CONVERTERS, Converter, converter_for

logger = get_logger("ingestion.field_assigner")


class FieldAssigner:
    """
    Converts and assigns raw string values to record fields.

    Holds no state besides its collaborators; safe to share and reentrant.
    Locking a record shared across threads is the caller's job.

    Usage:
        assigner = FieldAssigner(schema)
        record = schema.new_record("Opportunity")
        assigner.assign(record, " 2024-01-15 ", "Opportunity", "CloseDate")
    """

    def __init__(
        self,
        schema: Schema,
        converters: Mapping[str, Converter] = CONVERTERS,
    ):
        self._schema = schema
        self._converters = converters

    def assign(
        self,
        record: Any,
        raw_value: str | None,
        entity_name: str,
        field_name: str,
    ) -> None:
        """Assign raw_value to record.field_name. Never raises."""
        self.apply(record, raw_value, entity_name, field_name)

    def apply(
        self,
        record: Any,
        raw_value: str | None,
        entity_name: str,
        field_name: str,
    ) -> AssignmentResult:
        """Same as assign(), returning the outcome. Never raises."""
        with LogContext.bind(entity_name=entity_name, field_name=field_name):
            return self._apply(record, raw_value, entity_name, field_name)

    def _apply(
        self,
        record: Any,
        raw_value: str | None,
        entity_name: str,
        field_name: str,
    ) -> AssignmentResult:
        # entity_name and field_name reach every log line through LogContext.
        if raw_value is None or not str(raw_value).strip():
            return AssignmentResult(
                status=AssignmentStatus.SKIPPED_BLANK,
                entity_name=entity_name,
                field_name=field_name,
            )

        try:
            descriptor = describe_field(self._schema, entity_name, field_name)

            if not descriptor.writable:
                exc = FieldNotWritableError(entity_name, field_name)
                logger.warning("field_not_writable", extra={"raw_value": raw_value})
                return AssignmentResult(
                    status=AssignmentStatus.SKIPPED_NOT_WRITABLE,
                    entity_name=entity_name,
                    field_name=field_name,
                    error=_to_validation_error(exc, field_name),
                )

            text = str(raw_value).strip()
            type_tag = descriptor.type_tag
            value = converter_for(type_tag, self._converters)(text)
            write_field(record, field_name, value)
        # Contained by contract: see module docstring.
        except Exception as exc:
            logger.warning(
                "field_assignment_failed",
                extra={
                    "raw_value": raw_value,
                    "error_code": getattr(exc, "code", AssignmentError.code),
                    "error_message": str(exc),
                },
            )
            return AssignmentResult(
                status=AssignmentStatus.FAILED,
                entity_name=entity_name,
                field_name=field_name,
                error=_to_validation_error(exc, field_name),
            )

        logger.debug("field_assigned", extra={"type_tag": type_tag})
        return AssignmentResult(
            status=AssignmentStatus.ASSIGNED,
            entity_name=entity_name,
            field_name=field_name,
            value=value,
        )


def _to_validation_error(exc: Exception, field_name: str) -> ValidationError:
    return ValidationError(
        code=getattr(exc, "code", AssignmentError.code),
        message=str(exc),
        field=field_name,
        details={"exc_type": type(exc).__name__},
    )
