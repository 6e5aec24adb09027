"""Base class for domain events.

Every state change a user makes (creating a project, updating a task,
adding a member) is described by an event. The application layer turns
events into rows of the append-only activity log.

Example usage:
    >>> from taskflow.domain.shared.events import DomainEvent
    >>>
    >>> class TaskArchived(DomainEvent):
    ...     task_id: str
    ...
    >>> event = TaskArchived(actor_id="u1", task_id="t1")
    >>> event.occurred_at.tzinfo is not None
    True
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Immutable record of something that happened.

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: UTC timestamp when the event occurred.
        actor_id: The user who caused the event.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    actor_id: str

    model_config = {"frozen": True}
