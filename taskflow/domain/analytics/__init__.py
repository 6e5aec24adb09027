"""Analytics domain - health scores and productivity metrics.

Pure computations over read-only snapshots of projects and tasks. The
current time is always an explicit argument, so results are
reproducible.

Key Types:
    TaskSnapshot / ProjectSnapshot - Inputs
    ProjectHealth - Per-project metrics
    DashboardAnalytics / DashboardSummary - Cross-project metrics
    ProductivityDelta - NoBaseline | WeeklyChange

Errors (returned inside Err):
    DataIntegrityError - Value outside its enumeration or range
    ConfigurationError - Missing clock or inconsistent dates
"""

from .dashboard import (
    compute_dashboard_analytics,
    dashboard_summary,
    hours_logged,
    on_time_completion_rate,
    project_status_counts,
)
from .errors import AnalyticsError, ConfigurationError, DataIntegrityError
from .health import (
    ACTIVITY_BONUS,
    OVERDUE_PENALTY,
    completed_between,
    compute_project_health,
    count_overdue,
    days_since,
    days_until,
    health_score,
    is_overdue,
    percentage,
    productivity_delta,
    task_distribution,
    validate_now,
    validate_task,
    validate_tasks,
    weekly_completions,
)
from .models import (
    DashboardAnalytics,
    DashboardSummary,
    NoBaseline,
    ProductivityDelta,
    ProjectHealth,
    ProjectSnapshot,
    ProjectStatusCounts,
    TaskDistribution,
    TaskSnapshot,
    WeeklyChange,
)

__all__ = [
    # Models
    "TaskSnapshot",
    "ProjectSnapshot",
    "TaskDistribution",
    "ProjectHealth",
    "ProjectStatusCounts",
    "DashboardAnalytics",
    "DashboardSummary",
    "NoBaseline",
    "WeeklyChange",
    "ProductivityDelta",
    # Errors
    "AnalyticsError",
    "DataIntegrityError",
    "ConfigurationError",
    # Health
    "OVERDUE_PENALTY",
    "ACTIVITY_BONUS",
    "validate_task",
    "validate_tasks",
    "validate_now",
    "task_distribution",
    "percentage",
    "is_overdue",
    "count_overdue",
    "health_score",
    "days_until",
    "days_since",
    "completed_between",
    "weekly_completions",
    "productivity_delta",
    "compute_project_health",
    # Dashboard
    "project_status_counts",
    "on_time_completion_rate",
    "hours_logged",
    "compute_dashboard_analytics",
    "dashboard_summary",
]
