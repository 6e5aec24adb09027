"""Project health and productivity aggregation.

Pure functions over task snapshots - no I/O, no clock reads, no state
kept between calls. The current instant is always passed in as ``now``.

Formulas:
    completion_rate = done / total * 100               (0 when total == 0)
    overdue_rate    = overdue / total * 100            (0 when total == 0)
    health_score    = clamp(completion - 2 * overdue + 5 * activity, 0, 100)

A task is overdue when it has a due date before ``now`` and its status
is not DONE. Cancelled tasks with a past due date are counted as overdue.
"""

import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from taskflow.domain.analytics.errors import (
    AnalyticsError,
    ConfigurationError,
    DataIntegrityError,
)
from taskflow.domain.analytics.models import (
    NoBaseline,
    ProductivityDelta,
    ProjectHealth,
    TaskDistribution,
    TaskSnapshot,
    WeeklyChange,
    as_utc,
)
from taskflow.domain.shared import Err, Ok, Priority, Result
from taskflow.domain.task.models import TaskStatus

# =============================================================================
# Constants
# =============================================================================

OVERDUE_PENALTY = 2
ACTIVITY_BONUS = 5
HEALTH_MIN = 0.0
HEALTH_MAX = 100.0
WEEK = timedelta(days=7)
DAY_SECONDS = 86400

_STATUS_VALUES = {status.value for status in TaskStatus}
_PRIORITY_VALUES = {priority.value for priority in Priority}


# =============================================================================
# Validation
# =============================================================================


def validate_task(task: TaskSnapshot) -> Result[TaskSnapshot, DataIntegrityError]:
    """Check a snapshot's enumerated and numeric fields.

    Returns:
        Ok(task) when every field is in range, or
        Err(DataIntegrityError) naming the first offending field.
    """
    if task.status not in _STATUS_VALUES:
        return Err(DataIntegrityError(task.id, "status", task.status))
    if task.priority not in _PRIORITY_VALUES:
        return Err(DataIntegrityError(task.id, "priority", task.priority))
    if task.estimated_hours is not None and task.estimated_hours < 0:
        return Err(DataIntegrityError(task.id, "estimated_hours", task.estimated_hours))
    if task.actual_hours is not None and task.actual_hours < 0:
        return Err(DataIntegrityError(task.id, "actual_hours", task.actual_hours))
    return Ok(task)


def validate_tasks(
    tasks: Sequence[TaskSnapshot],
) -> Result[list[TaskSnapshot], DataIntegrityError]:
    """Validate every snapshot, stopping at the first bad one."""
    for task in tasks:
        result = validate_task(task)
        if isinstance(result, Err):
            return result
    return Ok(list(tasks))


def validate_now(now: datetime | None) -> Result[datetime, ConfigurationError]:
    """Require an explicit, timezone-aware current instant."""
    if now is None:
        return Err(ConfigurationError("Current time was not supplied"))
    if not isinstance(now, datetime):
        return Err(ConfigurationError(f"Current time is not a datetime: {now!r}"))
    if now.tzinfo is None:
        return Err(ConfigurationError("Current time must be timezone-aware"))
    return Ok(now)


# =============================================================================
# Building Blocks
# =============================================================================


def task_distribution(
    tasks: Sequence[TaskSnapshot],
) -> Result[TaskDistribution, DataIntegrityError]:
    """Count tasks per status bucket.

    Every task lands in exactly one bucket, so the bucket total always
    equals ``len(tasks)``. An unknown status is reported, never skipped.
    """
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        if task.status not in _STATUS_VALUES:
            return Err(DataIntegrityError(task.id, "status", task.status))
        counts[TaskStatus(task.status)] += 1

    return Ok(
        TaskDistribution(
            todo=counts[TaskStatus.TODO],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            in_review=counts[TaskStatus.IN_REVIEW],
            done=counts[TaskStatus.DONE],
            cancelled=counts[TaskStatus.CANCELLED],
        )
    )


def percentage(part: int, total: int) -> float:
    """``part / total * 100``, defined as 0 for an empty total."""
    if total <= 0:
        return 0.0
    return part / total * 100


def is_overdue(task: TaskSnapshot, now: datetime) -> bool:
    """True if the task has a past due date and is not DONE."""
    if task.due_date is None:
        return False
    return task.due_date < now and task.status != TaskStatus.DONE.value


def count_overdue(tasks: Sequence[TaskSnapshot], now: datetime) -> int:
    return sum(1 for task in tasks if is_overdue(task, now))


def health_score(
    completion_rate: float,
    overdue_rate: float,
    recent_activity_count: int,
) -> float:
    """Composite 0-100 score.

    Completion adds, overdue work subtracts twice as much, and every
    recent activity adds a small momentum bonus. The result is clamped.
    """
    raw = (
        completion_rate
        - OVERDUE_PENALTY * overdue_rate
        + ACTIVITY_BONUS * recent_activity_count
    )
    return max(HEALTH_MIN, min(HEALTH_MAX, raw))


def days_until(deadline: datetime | None, now: datetime) -> int | None:
    """Whole days until ``deadline``, rounded up.

    Returns None when there is no deadline. A passed deadline gives zero
    or a negative number, which callers must not confuse with None.
    """
    if deadline is None:
        return None
    seconds = (as_utc(deadline) - now).total_seconds()
    return math.ceil(seconds / DAY_SECONDS)


def days_since(start: datetime, now: datetime) -> int:
    """Whole days elapsed since ``start``, rounded up."""
    seconds = (now - as_utc(start)).total_seconds()
    return math.ceil(seconds / DAY_SECONDS)


# =============================================================================
# Weekly Productivity
# =============================================================================


def completed_between(
    tasks: Sequence[TaskSnapshot],
    start: datetime,
    end: datetime,
) -> int:
    """Count DONE tasks last updated inside the half-open window [start, end)."""
    return sum(
        1
        for task in tasks
        if task.status == TaskStatus.DONE.value and start <= task.updated_at < end
    )


def weekly_completions(tasks: Sequence[TaskSnapshot], now: datetime) -> tuple[int, int]:
    """Completions in the last 7 days and in the 7 days before that.

    Windows are [now - 7d, now) and [now - 14d, now - 7d). A task updated
    exactly at ``now - 7d`` belongs to the more recent week.

    Returns:
        (completed_this_week, completed_last_week)
    """
    week_start = now - WEEK
    this_week = completed_between(tasks, week_start, now)
    last_week = completed_between(tasks, week_start - WEEK, week_start)
    return this_week, last_week


def productivity_delta(this_week: int, last_week: int) -> ProductivityDelta:
    """Week-over-week change in completed tasks.

    Example:
        productivity_delta(3, 6)
        # -> WeeklyChange(kind="negative", percent_magnitude=50.0)
    """
    if last_week == 0:
        return NoBaseline()

    change = (this_week - last_week) / last_week * 100
    if change > 0:
        kind = "positive"
    elif change < 0:
        kind = "negative"
    else:
        kind = "neutral"
    return WeeklyChange(kind=kind, percent_magnitude=abs(change))


# =============================================================================
# Aggregate
# =============================================================================


def compute_project_health(
    tasks: Sequence[TaskSnapshot],
    recent_activity_count: int,
    now: datetime | None,
    project_created_at: datetime | None = None,
    project_end_date: datetime | None = None,
) -> Result[ProjectHealth, AnalyticsError]:
    """Compute every health and productivity metric for one task set.

    Args:
        tasks: Snapshots of the project's (or user's) tasks, any order.
        recent_activity_count: Number of recent activity log entries.
        now: Current instant; must be timezone-aware.
        project_created_at: Project creation time, for the age in days.
        project_end_date: Optional deadline, for days until deadline.

    Returns:
        Ok(ProjectHealth), or Err with a DataIntegrityError for bad task
        data or a ConfigurationError for inconsistent parameters.
    """
    now_result = validate_now(now)
    if isinstance(now_result, Err):
        return now_result
    now = now_result.value

    if recent_activity_count < 0:
        return Err(
            ConfigurationError(
                f"Recent activity count must be non-negative, got {recent_activity_count}"
            )
        )

    if project_created_at is not None and as_utc(project_created_at) > now:
        return Err(ConfigurationError("Project creation time is after the current time"))

    valid = validate_tasks(tasks)
    if isinstance(valid, Err):
        return valid

    distribution = task_distribution(tasks)
    if isinstance(distribution, Err):
        return distribution
    buckets = distribution.value

    total = buckets.total
    overdue = count_overdue(tasks, now)
    completion = percentage(buckets.done, total)
    overdue_pct = percentage(overdue, total)
    this_week, last_week = weekly_completions(tasks, now)

    return Ok(
        ProjectHealth(
            task_distribution=buckets,
            total_tasks=total,
            completed_tasks=buckets.done,
            overdue_tasks=overdue,
            completion_rate=completion,
            overdue_rate=overdue_pct,
            health_score=health_score(completion, overdue_pct, recent_activity_count),
            recent_activity_count=recent_activity_count,
            days_until_deadline=days_until(project_end_date, now),
            project_age_days=(
                days_since(project_created_at, now)
                if project_created_at is not None
                else None
            ),
            completed_this_week=this_week,
            completed_last_week=last_week,
            weekly_productivity_delta=productivity_delta(this_week, last_week),
        )
    )
