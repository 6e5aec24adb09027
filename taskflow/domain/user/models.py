"""User domain model.

Authentication is handled outside TaskFlow; a user here is just an
identity that owns projects, joins teams and gets assigned tasks.
"""

from datetime import datetime

from pydantic import Field

from taskflow.domain.shared import DomainModel


class User(DomainModel):
    """A registered user."""

    id: str
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    created_at: datetime
