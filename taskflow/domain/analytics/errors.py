"""Structured failures reported by the analytics functions.

These are values carried inside ``Err``, not exceptions. A handler that
receives one can log it and show "metrics unavailable" instead of a
wrong number.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AnalyticsError:
    """Base for analytics failures."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        """Serializable form for error responses and log records."""
        return {"kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class DataIntegrityError(AnalyticsError):
    """A record holds a value outside its allowed domain.

    Attributes:
        record_id: Identifier of the offending task or project.
        field: Name of the offending field.
        value: The rejected value.
    """

    record_id: str
    field: str
    value: Any

    @property
    def message(self) -> str:
        return f"Invalid {self.field} {self.value!r} on record {self.record_id}"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(record_id=self.record_id, field=self.field, value=repr(self.value))
        return data


@dataclass(frozen=True)
class ConfigurationError(AnalyticsError):
    """The caller passed inconsistent parameters (clock, dates, counts)."""

    reason: str

    @property
    def message(self) -> str:
        return self.reason
