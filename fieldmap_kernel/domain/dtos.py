"""
Data transfer objects for the fieldmap core.

Immutable value types passed between the converters, the assigner and
callers that want to inspect an outcome. No I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """
    A single validation error.

    Contract:
        Carries a machine-readable code, human-readable message, and the
        field it concerns.

    Non-goals:
        - Does NOT raise exceptions -- it IS the error representation.
    """

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None


class AssignmentStatus(str, Enum):
    """Outcome of a single field assignment."""

    ASSIGNED = "assigned"
    SKIPPED_BLANK = "skipped_blank"  # Nothing to assign; not an error
    SKIPPED_NOT_WRITABLE = "skipped_not_writable"
    FAILED = "failed"  # Schema miss, conversion failure, or rejected write


@dataclass(frozen=True)
class AssignmentResult:
    """
    Internal outcome of FieldAssigner.apply().

    ``value`` is the converted value when ASSIGNED; ``error`` is set for
    SKIPPED_NOT_WRITABLE and FAILED.
    """

    status: AssignmentStatus
    entity_name: str
    field_name: str
    value: Any = None
    error: ValidationError | None = None

    @property
    def assigned(self) -> bool:
        return self.status == AssignmentStatus.ASSIGNED

    @property
    def failed(self) -> bool:
        return self.status == AssignmentStatus.FAILED
