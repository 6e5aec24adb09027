"""CLI tests using Typer's CliRunner against a temporary data directory."""

import pytest
from typer.testing import CliRunner

from taskflow import __version__
from taskflow.application import Workspace
from taskflow.interfaces.cli import app

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKFLOW_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("TASKFLOW_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("TASKFLOW_USER", raising=False)
    return tmp_path / "data"


@pytest.fixture
def user_id(data_dir):
    result = runner.invoke(app, ["user", "add", "Ada", "ada@example.com"])
    assert result.exit_code == 0, result.output
    [user] = Workspace(data_dir).users.list_all().value
    return user.id


def _only_project(data_dir, user_id):
    [project] = Workspace(data_dir).list_projects(user_id).value
    return project


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_user_add_prints_id(data_dir, user_id):
    result = runner.invoke(app, ["user", "list"])
    assert result.exit_code == 0
    assert "Ada" in result.output


def test_duplicate_user(data_dir, user_id):
    result = runner.invoke(app, ["user", "add", "Ada", "ada@example.com"])
    assert result.exit_code == 1
    assert "already registered" in result.output


def test_user_required(data_dir):
    result = runner.invoke(app, ["project", "list"])
    assert result.exit_code == 1
    assert "No user specified" in result.output


def test_project_create_and_list(data_dir, user_id):
    result = runner.invoke(app, ["project", "create", "Launch", "--priority", "HIGH", "-u", user_id])
    assert result.exit_code == 0, result.output
    assert "Created project: Launch" in result.output

    result = runner.invoke(app, ["project", "list"], env={"TASKFLOW_USER": user_id})
    assert result.exit_code == 0
    assert "Launch" in result.output
    assert _only_project(data_dir, user_id).priority.value == "HIGH"


def test_unknown_project(data_dir, user_id):
    result = runner.invoke(app, ["project", "show", "nope", "-u", user_id])
    assert result.exit_code == 1
    assert "Project not found" in result.output


def test_task_flow_and_health(data_dir, user_id):
    runner.invoke(app, ["project", "create", "Launch", "-u", user_id])
    project = _only_project(data_dir, user_id)

    result = runner.invoke(
        app,
        ["task", "add", "Write copy", "-p", project.id, "--hours", "2", "-t", "docs", "-u", user_id],
    )
    assert result.exit_code == 0, result.output
    [task] = Workspace(data_dir).tasks.list_for_project(project.id).value
    assert task.tags == ["docs"]

    result = runner.invoke(app, ["task", "status", task.id, "DONE", "--hours", "3", "-u", user_id])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["project", "health", project.id, "-u", user_id])
    assert result.exit_code == 0, result.output
    assert "Completion rate:  100%" in result.output
    assert "1 this week" in result.output

    result = runner.invoke(app, ["project", "show", project.id, "-u", user_id])
    assert 'Completed task "Write copy"' in result.output


def test_task_list_empty(data_dir, user_id):
    result = runner.invoke(app, ["task", "list", "--mine", "-u", user_id])
    assert result.exit_code == 0
    assert "No tasks found." in result.output


def test_analytics(data_dir, user_id):
    runner.invoke(app, ["project", "create", "Launch", "-u", user_id])

    result = runner.invoke(app, ["analytics", "-u", user_id])

    assert result.exit_code == 0, result.output
    assert "Projects: 1" in result.output
    assert "no baseline" in result.output
