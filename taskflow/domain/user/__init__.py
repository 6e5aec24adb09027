"""User domain package."""

from taskflow.domain.user.models import User

__all__ = ["User"]
