"""Project domain models.

Pure data structures for the project aggregate: the project itself and
its team memberships. No I/O.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from taskflow.domain.shared import DomainModel, Priority


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MemberRole(str, Enum):
    """Role of a user inside a project team."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"


class Member(DomainModel):
    """A (user, project, role) association."""

    user_id: str
    project_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: datetime


class Project(DomainModel):
    """A project owned by one user and shared with team members.

    The owner is not listed in ``members``; ownership grants every
    permission a member role can grant.
    """

    id: str
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: datetime | None = None
    end_date: datetime | None = None
    color: str = "#3B82F6"
    owner_id: str
    members: list[Member] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    def member(self, user_id: str) -> Member | None:
        """Return the membership of ``user_id``, if any."""
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def is_owner(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def team_size(self) -> int:
        """Members plus the owner."""
        return len(self.members) + 1


class ProjectSummary(DomainModel):
    """Lightweight project view for list pages."""

    id: str
    name: str
    status: ProjectStatus
    priority: Priority
    color: str
    owner_id: str
    task_count: int = 0
    completed_tasks: int = 0
    member_count: int = 0
    progress_percent: int = 0
