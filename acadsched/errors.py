from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .validate.checks import ConflictReport


class SchedulingError(Exception):
    """Base class for errors raised by the scheduling core."""


class ValidationError(SchedulingError):
    """Malformed candidate or configuration; fixable by the caller."""


class NotFoundError(SchedulingError):
    """A referenced staff, subject, classroom or assignment does not exist."""


class DuplicateKeyError(SchedulingError):
    """Raised by a store when an insert would break a uniqueness invariant."""

    def __init__(self, key: tuple, existing_id: str | None = None):
        super().__init__(f"duplicate key {key} (held by {existing_id})")
        self.key = key
        self.existing_id = existing_id


class ConflictError(SchedulingError):
    def __init__(self, report: "ConflictReport", message: str | None = None):
        super().__init__(message or "; ".join(c.message for c in report.conflicts))
        self.report = report


class WriteRaceError(ConflictError):
    """A colliding record was written between the pre-check and the insert.

    The caller should re-fetch and retry; nothing is retried here.
    """
