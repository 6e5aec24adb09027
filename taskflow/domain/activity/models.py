"""Activity log models.

An activity is an append-only record of a user-visible change. The
analytics code only ever counts recent entries; it never parses the
description.
"""

from datetime import datetime
from enum import Enum

from taskflow.domain.shared import DomainModel


class ActivityType(str, Enum):
    """Kind of change an activity records."""

    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_UPDATED = "PROJECT_UPDATED"
    MEMBER_ADDED = "MEMBER_ADDED"
    MEMBER_REMOVED = "MEMBER_REMOVED"
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_COMPLETED = "TASK_COMPLETED"
    TASK_DELETED = "TASK_DELETED"
    COMMENT_ADDED = "COMMENT_ADDED"


class Activity(DomainModel):
    """One entry of a project's activity log."""

    id: str
    type: ActivityType
    description: str
    project_id: str | None = None
    task_id: str | None = None
    user_id: str
    created_at: datetime

    model_config = {"frozen": True}
