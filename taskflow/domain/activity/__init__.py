"""Activity log domain package.

Append-only records of user actions, derived from domain events.
"""

from taskflow.domain.activity.log import activity_from_event
from taskflow.domain.activity.models import Activity, ActivityType

__all__ = [
    "Activity",
    "ActivityType",
    "activity_from_event",
]
