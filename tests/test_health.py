"""Tests for project health and weekly productivity."""

from datetime import datetime, timedelta

import pytest

from taskflow.domain.analytics import (
    ConfigurationError,
    DataIntegrityError,
    NoBaseline,
    WeeklyChange,
    compute_project_health,
    days_until,
    health_score,
    is_overdue,
    percentage,
    productivity_delta,
    task_distribution,
    validate_now,
    weekly_completions,
)
from taskflow.domain.shared import Err, Ok
from tests.conftest import NOW, snapshot


def _health(tasks, activity=0, **kwargs):
    result = compute_project_health(tasks, recent_activity_count=activity, now=NOW, **kwargs)
    assert isinstance(result, Ok), result
    return result.value


# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    def test_half_done_quarter_overdue_with_three_activities(self):
        tasks = [
            snapshot("t1", "DONE"),
            snapshot("t2", "DONE"),
            snapshot("t3", "IN_PROGRESS", due_in_days=-1),
            snapshot("t4", "TODO", due_in_days=7),
        ]
        health = _health(tasks, activity=3)

        assert health.completion_rate == 50
        assert health.overdue_rate == 25
        assert health.health_score == 15  # 50 - 2*25 + 5*3
        assert health.overdue_tasks == 1
        assert health.completed_tasks == 2

    def test_empty_project(self):
        health = _health([])

        assert health.total_tasks == 0
        assert health.completion_rate == 0
        assert health.overdue_rate == 0
        assert health.health_score == 0
        assert isinstance(health.weekly_productivity_delta, NoBaseline)

    def test_no_baseline_when_nothing_completed_last_week(self):
        tasks = [snapshot(f"t{i}", "DONE", updated_days_ago=1) for i in range(5)]
        health = _health(tasks)

        assert health.completed_this_week == 5
        assert health.completed_last_week == 0
        assert health.weekly_productivity_delta == NoBaseline()

    def test_negative_change_week_over_week(self):
        tasks = [snapshot(f"a{i}", "DONE", updated_days_ago=2) for i in range(3)]
        tasks += [snapshot(f"b{i}", "DONE", updated_days_ago=10) for i in range(6)]
        health = _health(tasks)

        assert (health.completed_this_week, health.completed_last_week) == (3, 6)
        assert health.weekly_productivity_delta == WeeklyChange(
            kind="negative", percent_magnitude=50.0
        )


# =============================================================================
# Properties
# =============================================================================


class TestProperties:
    def test_every_task_lands_in_one_bucket(self):
        statuses = ["TODO", "IN_PROGRESS", "IN_REVIEW", "DONE", "CANCELLED", "DONE", "TODO"]
        tasks = [snapshot(f"t{i}", s) for i, s in enumerate(statuses)]

        distribution = task_distribution(tasks).value

        assert distribution.total == len(tasks)
        assert distribution.done == 2
        assert distribution.todo == 2

    def test_percentage_of_empty_total_is_zero(self):
        assert percentage(0, 0) == 0
        assert percentage(3, 0) == 0

    @pytest.mark.parametrize(
        "completion, overdue, activity, expected",
        [
            (100, 0, 10, 100),  # clamped high
            (0, 100, 0, 0),  # clamped low
            (40, 10, 2, 30),
        ],
    )
    def test_health_score_is_clamped(self, completion, overdue, activity, expected):
        assert health_score(completion, overdue, activity) == expected

    def test_completing_a_task_never_lowers_completion_or_health(self):
        before = [snapshot("t1", "DONE"), snapshot("t2", "TODO"), snapshot("t3", "TODO")]
        after = [snapshot("t1", "DONE"), snapshot("t2", "DONE"), snapshot("t3", "TODO")]

        a, b = _health(before, activity=1), _health(after, activity=1)

        assert b.completion_rate >= a.completion_rate
        assert b.health_score >= a.health_score

    def test_task_without_due_date_is_never_overdue(self):
        for status in ["TODO", "IN_PROGRESS", "IN_REVIEW", "CANCELLED"]:
            assert not is_overdue(snapshot(status=status), NOW)

    def test_done_task_is_not_overdue(self):
        assert not is_overdue(snapshot(status="DONE", due_in_days=-5), NOW)

    def test_cancelled_task_past_due_counts_as_overdue(self):
        assert is_overdue(snapshot(status="CANCELLED", due_in_days=-5), NOW)

    def test_due_exactly_now_is_not_overdue(self):
        assert not is_overdue(snapshot(status="TODO", due_in_days=0), NOW)


# =============================================================================
# Weekly Windows
# =============================================================================


class TestWeeklyCompletions:
    def test_boundary_belongs_to_this_week(self):
        tasks = [snapshot("t1", "DONE", updated_days_ago=7)]
        assert weekly_completions(tasks, NOW) == (1, 0)

    def test_fourteen_days_ago_belongs_to_last_week(self):
        tasks = [snapshot("t1", "DONE", updated_days_ago=14)]
        assert weekly_completions(tasks, NOW) == (0, 1)

    def test_older_and_future_updates_are_ignored(self):
        tasks = [
            snapshot("t1", "DONE", updated_days_ago=15),
            snapshot("t2", "DONE", updated_days_ago=-1),
        ]
        assert weekly_completions(tasks, NOW) == (0, 0)

    def test_only_done_tasks_count(self):
        tasks = [snapshot("t1", "IN_REVIEW", updated_days_ago=1)]
        assert weekly_completions(tasks, NOW) == (0, 0)

    def test_unchanged_week_is_neutral(self):
        assert productivity_delta(4, 4) == WeeklyChange(kind="neutral", percent_magnitude=0)

    def test_improvement_is_positive(self):
        assert productivity_delta(3, 2) == WeeklyChange(kind="positive", percent_magnitude=50)


# =============================================================================
# Dates
# =============================================================================


class TestDates:
    def test_days_until_rounds_up(self):
        assert days_until(NOW + timedelta(days=2, hours=1), NOW) == 3

    def test_passed_deadline_is_not_none(self):
        assert days_until(NOW - timedelta(days=2), NOW) == -2

    def test_no_deadline(self):
        assert days_until(None, NOW) is None

    def test_deadline_and_age_in_health(self):
        health = _health(
            [],
            project_created_at=NOW - timedelta(days=10),
            project_end_date=NOW + timedelta(days=5),
        )
        assert health.days_until_deadline == 5
        assert health.project_age_days == 10

    def test_naive_project_dates_are_treated_as_utc(self):
        naive = (NOW - timedelta(days=3)).replace(tzinfo=None)
        assert _health([], project_created_at=naive).project_age_days == 3


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    def test_unknown_status_is_reported(self):
        result = compute_project_health([snapshot("bad", "BLOCKED")], 0, NOW)

        assert isinstance(result, Err)
        assert result.error == DataIntegrityError("bad", "status", "BLOCKED")

    def test_unknown_priority_is_reported(self):
        result = compute_project_health([snapshot("bad", priority="CRITICAL")], 0, NOW)

        assert isinstance(result.error, DataIntegrityError)
        assert result.error.field == "priority"

    def test_negative_hours_are_reported(self):
        result = compute_project_health([snapshot("bad", actual_hours=-1)], 0, NOW)
        assert result.error.field == "actual_hours"

    def test_missing_clock(self):
        result = compute_project_health([], 0, None)
        assert isinstance(result.error, ConfigurationError)

    def test_naive_clock(self):
        assert isinstance(validate_now(datetime(2026, 1, 1)), Err)

    def test_project_created_in_the_future(self):
        result = compute_project_health([], 0, NOW, project_created_at=NOW + timedelta(days=1))
        assert isinstance(result.error, ConfigurationError)

    def test_negative_activity_count(self):
        result = compute_project_health([], -1, NOW)
        assert isinstance(result.error, ConfigurationError)

    def test_error_serializes(self):
        data = DataIntegrityError("t9", "status", "BLOCKED").to_dict()
        assert data["kind"] == "DataIntegrityError"
        assert data["record_id"] == "t9"
        assert "BLOCKED" in data["message"]
