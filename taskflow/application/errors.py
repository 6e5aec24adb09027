"""Failures returned by the application services.

Carried inside ``Err``. The HTTP layer maps each kind to a status code
and the CLI prints the message.
"""

from dataclasses import dataclass

from pydantic import ValidationError


@dataclass(frozen=True)
class ServiceError:
    """Base for application failures."""

    message: str

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class NotFound(ServiceError):
    """The record does not exist or is not visible to the user."""


@dataclass(frozen=True)
class Forbidden(ServiceError):
    """The user can see the record but may not perform the action."""


@dataclass(frozen=True)
class InvalidInput(ServiceError):
    """A value failed a business rule."""


@dataclass(frozen=True)
class StorageFailure(ServiceError):
    """Reading or writing the data directory failed."""


def describe_validation_error(error: ValidationError) -> str:
    """One-line message for the first problem in a pydantic error."""
    detail = error.errors()[0]
    location = ".".join(str(part) for part in detail["loc"])
    return f"{location}: {detail['msg']}" if location else detail["msg"]
