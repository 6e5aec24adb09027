"""Project domain package.

The project aggregate: projects, team memberships and the events that
describe changes to them.
"""

from taskflow.domain.project.events import (
    MemberAdded,
    MemberRemoved,
    ProjectCreated,
    ProjectDeleted,
    ProjectUpdated,
)
from taskflow.domain.project.models import (
    Member,
    MemberRole,
    Project,
    ProjectStatus,
    ProjectSummary,
)

__all__ = [
    "Member",
    "MemberAdded",
    "MemberRemoved",
    "MemberRole",
    "Project",
    "ProjectCreated",
    "ProjectDeleted",
    "ProjectStatus",
    "ProjectSummary",
    "ProjectUpdated",
]
