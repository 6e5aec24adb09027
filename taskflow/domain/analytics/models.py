"""Analytics input snapshots and result records.

Snapshots are read-only copies of stored entities. Their status and
priority are kept as raw strings so that the aggregator, not the
model constructor, decides what counts as invalid data.
"""

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import Field, field_validator

from taskflow.domain.project.models import Project
from taskflow.domain.shared import DomainModel
from taskflow.domain.task.models import Task, TaskStatus


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; leave aware ones unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# =============================================================================
# Snapshots (inputs)
# =============================================================================


class TaskSnapshot(DomainModel):
    """Point-in-time copy of the task fields analytics needs."""

    id: str
    status: str
    priority: str = "MEDIUM"
    due_date: datetime | None = None
    updated_at: datetime
    estimated_hours: float | None = None
    actual_hours: float | None = None
    assignee_id: str | None = None
    project_id: str | None = None

    model_config = {"frozen": True}

    @field_validator("due_date", "updated_at")
    @classmethod
    def _normalize_tz(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @classmethod
    def from_task(cls, task: Task) -> "TaskSnapshot":
        """Snapshot a stored task."""
        return cls(
            id=task.id,
            status=task.status.value,
            priority=task.priority.value,
            due_date=task.due_date,
            updated_at=task.updated_at,
            estimated_hours=task.estimated_hours,
            actual_hours=task.actual_hours,
            assignee_id=task.assignee_id,
            project_id=task.project_id,
        )


class ProjectSnapshot(DomainModel):
    """Point-in-time copy of the project fields analytics needs."""

    id: str
    status: str
    created_at: datetime
    end_date: datetime | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_project(cls, project: Project) -> "ProjectSnapshot":
        return cls(
            id=project.id,
            status=project.status.value,
            created_at=project.created_at,
            end_date=project.end_date,
        )


# =============================================================================
# Results (outputs)
# =============================================================================


class TaskDistribution(DomainModel):
    """Task counts per status bucket."""

    todo: int = 0
    in_progress: int = 0
    in_review: int = 0
    done: int = 0
    cancelled: int = 0

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.in_review + self.done + self.cancelled

    def count(self, status: TaskStatus) -> int:
        return getattr(self, status.value.lower())


class NoBaseline(DomainModel):
    """Week-over-week change is undefined: nothing was completed last week."""

    kind: Literal["no-baseline"] = "no-baseline"


class WeeklyChange(DomainModel):
    """Direction and size of the week-over-week change in completions."""

    kind: Literal["positive", "negative", "neutral"]
    percent_magnitude: float = Field(ge=0)


ProductivityDelta = Annotated[NoBaseline | WeeklyChange, Field(discriminator="kind")]


class ProjectHealth(DomainModel):
    """All derived metrics for one project (or one user's task set).

    Rates are kept at full precision; round them only for display.
    """

    task_distribution: TaskDistribution
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    completion_rate: float
    overdue_rate: float
    health_score: float
    recent_activity_count: int
    days_until_deadline: int | None = None
    project_age_days: int | None = None
    completed_this_week: int
    completed_last_week: int
    weekly_productivity_delta: ProductivityDelta


class ProjectStatusCounts(DomainModel):
    """Number of projects in each lifecycle status."""

    total: int = 0
    planning: int = 0
    active: int = 0
    on_hold: int = 0
    completed: int = 0
    cancelled: int = 0


class DashboardAnalytics(DomainModel):
    """Cross-project analytics for everything a user can see."""

    projects: ProjectStatusCounts
    tasks: TaskDistribution
    overdue_tasks: int
    completed_this_week: int
    completed_last_week: int
    weekly_productivity_delta: ProductivityDelta
    on_time_completion_rate: float
    total_hours_logged: float
    average_hours_per_task: float


class DashboardSummary(DomainModel):
    """Headline counters for the dashboard landing page."""

    project_count: int
    active_task_count: int
    completed_task_count: int
    overdue_task_count: int
