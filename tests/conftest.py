"""Shared fixtures: a temporary workspace, a fixed clock and a few users."""

from datetime import UTC, datetime, timedelta

import pytest

from taskflow.application import Workspace
from taskflow.domain.analytics import TaskSnapshot

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


def snapshot(
    task_id: str = "t1",
    status: str = "TODO",
    priority: str = "MEDIUM",
    due_in_days: float | None = None,
    updated_days_ago: float = 30,
    **fields,
) -> TaskSnapshot:
    """Task snapshot relative to NOW."""
    return TaskSnapshot(
        id=task_id,
        status=status,
        priority=priority,
        due_date=NOW + timedelta(days=due_in_days) if due_in_days is not None else None,
        updated_at=NOW - timedelta(days=updated_days_ago),
        **fields,
    )


@pytest.fixture
def workspace(tmp_path) -> Workspace:
    return Workspace(tmp_path / "data")


@pytest.fixture
def owner(workspace):
    return workspace.register_user("Olivia Owner", "olivia@example.com").value


@pytest.fixture
def member(workspace):
    return workspace.register_user("Max Member", "max@example.com").value


@pytest.fixture
def outsider(workspace):
    return workspace.register_user("Oscar Outsider", "oscar@example.com").value


@pytest.fixture
def project(workspace, owner):
    return workspace.create_project(owner.id, "Website redesign").value
