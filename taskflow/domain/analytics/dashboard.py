"""Cross-project analytics for a user's dashboard.

Pure functions, built from the same building blocks as the per-project
health metrics.
"""

from collections.abc import Sequence
from datetime import datetime

from taskflow.domain.analytics.errors import AnalyticsError, DataIntegrityError
from taskflow.domain.analytics.health import (
    count_overdue,
    percentage,
    productivity_delta,
    task_distribution,
    validate_now,
    validate_tasks,
    weekly_completions,
)
from taskflow.domain.analytics.models import (
    DashboardAnalytics,
    DashboardSummary,
    ProjectSnapshot,
    ProjectStatusCounts,
    TaskSnapshot,
)
from taskflow.domain.project.models import ProjectStatus
from taskflow.domain.shared import Err, Ok, Result
from taskflow.domain.task.models import ACTIVE_STATUSES, TaskStatus

_ACTIVE_VALUES = {status.value for status in ACTIVE_STATUSES}


def project_status_counts(
    projects: Sequence[ProjectSnapshot],
) -> Result[ProjectStatusCounts, DataIntegrityError]:
    """Count projects per lifecycle status."""
    counts = {status: 0 for status in ProjectStatus}
    for project in projects:
        try:
            counts[ProjectStatus(project.status)] += 1
        except ValueError:
            return Err(DataIntegrityError(project.id, "status", project.status))

    return Ok(
        ProjectStatusCounts(
            total=len(projects),
            planning=counts[ProjectStatus.PLANNING],
            active=counts[ProjectStatus.ACTIVE],
            on_hold=counts[ProjectStatus.ON_HOLD],
            completed=counts[ProjectStatus.COMPLETED],
            cancelled=counts[ProjectStatus.CANCELLED],
        )
    )


def on_time_completion_rate(tasks: Sequence[TaskSnapshot]) -> float:
    """Share of DONE tasks finished by their due date.

    A DONE task without a due date counts as on time. Returns 0 when
    nothing is done.
    """
    done = [task for task in tasks if task.status == TaskStatus.DONE.value]
    on_time = sum(
        1 for task in done if task.due_date is None or task.updated_at <= task.due_date
    )
    return percentage(on_time, len(done))


def hours_logged(tasks: Sequence[TaskSnapshot]) -> tuple[float, float]:
    """Total and average actual hours over tasks that logged any.

    Returns:
        (total_hours, average_hours_per_task)
    """
    logged = [task.actual_hours for task in tasks if task.actual_hours]
    total = float(sum(logged))
    average = total / len(logged) if logged else 0.0
    return total, average


def compute_dashboard_analytics(
    projects: Sequence[ProjectSnapshot],
    tasks: Sequence[TaskSnapshot],
    now: datetime | None,
) -> Result[DashboardAnalytics, AnalyticsError]:
    """Aggregate analytics over every project and task a user can see."""
    now_result = validate_now(now)
    if isinstance(now_result, Err):
        return now_result
    now = now_result.value

    project_counts = project_status_counts(projects)
    if isinstance(project_counts, Err):
        return project_counts

    valid = validate_tasks(tasks)
    if isinstance(valid, Err):
        return valid

    distribution = task_distribution(tasks)
    if isinstance(distribution, Err):
        return distribution

    this_week, last_week = weekly_completions(tasks, now)
    total_hours, average_hours = hours_logged(tasks)

    return Ok(
        DashboardAnalytics(
            projects=project_counts.value,
            tasks=distribution.value,
            overdue_tasks=count_overdue(tasks, now),
            completed_this_week=this_week,
            completed_last_week=last_week,
            weekly_productivity_delta=productivity_delta(this_week, last_week),
            on_time_completion_rate=on_time_completion_rate(tasks),
            total_hours_logged=total_hours,
            average_hours_per_task=average_hours,
        )
    )


def dashboard_summary(
    project_count: int,
    tasks: Sequence[TaskSnapshot],
    now: datetime | None,
) -> Result[DashboardSummary, AnalyticsError]:
    """Headline counters: projects, active, completed and overdue tasks."""
    now_result = validate_now(now)
    if isinstance(now_result, Err):
        return now_result

    valid = validate_tasks(tasks)
    if isinstance(valid, Err):
        return valid

    return Ok(
        DashboardSummary(
            project_count=project_count,
            active_task_count=sum(1 for t in tasks if t.status in _ACTIVE_VALUES),
            completed_task_count=sum(
                1 for t in tasks if t.status == TaskStatus.DONE.value
            ),
            overdue_task_count=count_overdue(tasks, now_result.value),
        )
    )
