"""Request/Response schemas for the TaskFlow API.

These Pydantic models define the API contract for request and response
bodies. They are separate from the domain models in taskflow.domain.
Field names are camelCase on the wire.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from taskflow.application.ai_service import ChatContext
from taskflow.domain.analytics import (
    DashboardAnalytics,
    NoBaseline,
    ProductivityDelta,
    ProjectHealth,
    ProjectStatusCounts,
    TaskDistribution,
)
from taskflow.domain.project import MemberRole, ProjectStatus
from taskflow.domain.shared import DomainModel, Priority
from taskflow.domain.task import Comment, Task, TaskStatus
from taskflow.interfaces.display import round_half_up


# =============================================================================
# User Schemas
# =============================================================================


class CreateUserRequest(DomainModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")


# =============================================================================
# Project Schemas
# =============================================================================


class CreateProjectRequest(DomainModel):
    """Request to create a new project."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: datetime | None = None
    end_date: datetime | None = None
    color: str = "#3B82F6"


class UpdateProjectRequest(DomainModel):
    """Request to update project settings. Omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    status: ProjectStatus | None = None
    priority: Priority | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    color: str | None = None


class AddMemberRequest(DomainModel):
    user_id: str
    role: MemberRole = MemberRole.MEMBER


# =============================================================================
# Task Schemas
# =============================================================================


class CreateTaskRequest(DomainModel):
    """Request to create a task inside a project."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    project_id: str = Field(min_length=1)
    assignee_id: str | None = None
    tags: list[str] = Field(default_factory=list)


class UpdateTaskRequest(DomainModel):
    """Request to update a task. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    actual_hours: float | None = Field(default=None, ge=0)
    assignee_id: str | None = None
    tags: list[str] | None = None


class CreateCommentRequest(DomainModel):
    content: str = Field(min_length=1)


class TaskDetail(Task):
    """A task with its comments, newest first."""

    comments: list[Comment] = Field(default_factory=list)


class MessageResponse(DomainModel):
    message: str


# =============================================================================
# Analytics Schemas
# =============================================================================


class ProjectHealthResponse(DomainModel):
    """Project health for display: percentages rounded to integers."""

    project_id: str
    health_score: int
    completion_rate: int
    overdue_rate: int
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    recent_activity_count: int
    days_until_deadline: int | None = None
    project_age_days: int | None = None
    task_distribution: TaskDistribution
    completed_this_week: int
    completed_last_week: int
    weekly_productivity_delta: ProductivityDelta

    @classmethod
    def from_health(cls, project_id: str, health: ProjectHealth) -> "ProjectHealthResponse":
        return cls(
            project_id=project_id,
            health_score=round_half_up(health.health_score),
            completion_rate=round_half_up(health.completion_rate),
            overdue_rate=round_half_up(health.overdue_rate),
            total_tasks=health.total_tasks,
            completed_tasks=health.completed_tasks,
            overdue_tasks=health.overdue_tasks,
            recent_activity_count=health.recent_activity_count,
            days_until_deadline=health.days_until_deadline,
            project_age_days=health.project_age_days,
            task_distribution=health.task_distribution,
            completed_this_week=health.completed_this_week,
            completed_last_week=health.completed_last_week,
            weekly_productivity_delta=_rounded_delta(health.weekly_productivity_delta),
        )


def _rounded_delta(delta: ProductivityDelta) -> ProductivityDelta:
    if isinstance(delta, NoBaseline):
        return delta
    return delta.model_copy(update={"percent_magnitude": round_half_up(delta.percent_magnitude)})


class AnalyticsResponse(DomainModel):
    """Dashboard analytics with display rounding applied."""

    projects: ProjectStatusCounts
    tasks: TaskDistribution
    overdue_tasks: int
    completed_this_week: int
    completed_last_week: int
    weekly_productivity_delta: ProductivityDelta
    on_time_completion_rate: int
    total_hours_logged: float
    average_hours_per_task: float
    generated_at: datetime

    @classmethod
    def from_analytics(cls, analytics: DashboardAnalytics, now: datetime) -> "AnalyticsResponse":
        return cls(
            projects=analytics.projects,
            tasks=analytics.tasks,
            overdue_tasks=analytics.overdue_tasks,
            completed_this_week=analytics.completed_this_week,
            completed_last_week=analytics.completed_last_week,
            weekly_productivity_delta=_rounded_delta(analytics.weekly_productivity_delta),
            on_time_completion_rate=round_half_up(analytics.on_time_completion_rate),
            total_hours_logged=round(analytics.total_hours_logged, 1),
            average_hours_per_task=round(analytics.average_hours_per_task, 1),
            generated_at=now,
        )


# =============================================================================
# AI Schemas
# =============================================================================


class ProjectInsightsRequest(DomainModel):
    project_id: str = Field(min_length=1)


class SuggestTasksRequest(DomainModel):
    project_name: str = Field(min_length=1)
    project_description: str | None = None
    project_type: str | None = None
    target_audience: str | None = None
    timeline: str | None = None


class ChatRequest(DomainModel):
    message: str = Field(min_length=1)
    context: ChatContext | None = None


class AIStatusResponse(DomainModel):
    provider: Literal["local", "openai", "mock"]
    model: str
    available: bool
    details: dict = Field(default_factory=dict)
