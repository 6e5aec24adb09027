"""Tests for the pure task service."""

from datetime import timedelta

from taskflow.application import Forbidden, InvalidInput
from taskflow.application import project_service, task_service
from taskflow.domain.project import MemberRole
from taskflow.domain.shared import Ok, Priority
from taskflow.domain.task import TaskStatus
from tests.conftest import NOW


def _project():
    project = project_service.create_project("owner", "Launch", now=NOW).value[0]
    project = project_service.add_member(project, "owner", "dev", MemberRole.MEMBER, NOW).value[0]
    return project


def _task(project, **fields):
    return task_service.create_task(project, "owner", "Write copy", NOW, **fields).value[0]


class TestCreate:
    def test_creates_task_and_event(self):
        project = _project()

        task, event = task_service.create_task(
            project, "dev", " Write copy ", NOW, priority=Priority.URGENT, tags=["docs"]
        ).value

        assert task.title == "Write copy"
        assert task.project_id == project.id
        assert task.priority == Priority.URGENT
        assert task.status == TaskStatus.TODO
        assert task.tags == ["docs"]
        assert event.task_id == task.id

    def test_outsider_is_denied(self):
        result = task_service.create_task(_project(), "stranger", "Sneak", NOW)
        assert result.error == Forbidden("Project not found or access denied")

    def test_title_required(self):
        assert isinstance(task_service.create_task(_project(), "owner", " ", NOW).error, InvalidInput)

    def test_title_too_long(self):
        result = task_service.create_task(_project(), "owner", "x" * 201, NOW)
        assert isinstance(result.error, InvalidInput)

    def test_negative_estimate(self):
        result = task_service.create_task(_project(), "owner", "Plan", NOW, estimated_hours=-2)
        assert isinstance(result.error, InvalidInput)

    def test_assignee_must_be_on_team(self):
        project = _project()
        assert isinstance(
            task_service.create_task(project, "owner", "Plan", NOW, assignee_id="dev"), Ok
        )
        result = task_service.create_task(project, "owner", "Plan", NOW, assignee_id="stranger")
        assert isinstance(result.error, InvalidInput)


class TestUpdate:
    def test_status_change_is_recorded(self):
        project = _project()
        later = NOW + timedelta(hours=2)

        updated, event = task_service.update_task(
            _task(project), project, "dev", {"status": TaskStatus.DONE, "actual_hours": 3}, later
        ).value

        assert updated.status == TaskStatus.DONE
        assert updated.actual_hours == 3
        assert updated.updated_at == later
        assert event.previous_status == TaskStatus.TODO
        assert event.status == TaskStatus.DONE

    def test_non_status_change_has_no_status(self):
        project = _project()

        _, event = task_service.update_task(
            _task(project), project, "dev", {"title": "Rewrite copy"}
        ).value

        assert event.title == "Rewrite copy"
        assert event.previous_status is None
        assert event.status is None

    def test_any_update_bumps_updated_at(self):
        project = _project()
        later = NOW + timedelta(minutes=5)

        updated, _ = task_service.update_task(
            _task(project), project, "owner", {"tags": ["x"]}, later
        ).value

        assert updated.updated_at == later

    def test_outsider_cannot_update(self):
        project = _project()
        result = task_service.update_task(_task(project), project, "stranger", {"title": "x"})
        assert isinstance(result.error, Forbidden)

    def test_invalid_status(self):
        project = _project()
        result = task_service.update_task(_task(project), project, "owner", {"status": "BLOCKED"})
        assert isinstance(result.error, InvalidInput)

    def test_reassign_outside_team(self):
        project = _project()
        result = task_service.update_task(
            _task(project), project, "owner", {"assignee_id": "stranger"}
        )
        assert isinstance(result.error, InvalidInput)

    def test_unassign(self):
        project = _project()
        task = _task(project, assignee_id="dev")

        updated, _ = task_service.update_task(task, project, "owner", {"assignee_id": None}).value

        assert updated.assignee_id is None


class TestDelete:
    def test_member_cannot_delete(self):
        project = _project()
        result = task_service.delete_task(_task(project), project, "dev")
        assert isinstance(result.error, Forbidden)

    def test_owner_deletes(self):
        project = _project()
        task = _task(project)
        assert task_service.delete_task(task, project, "owner").value.task_id == task.id


class TestComments:
    def test_member_comments(self):
        project = _project()
        task = _task(project)

        comment, event = task_service.add_comment(task, project, "dev", "  Looks good  ", NOW).value

        assert comment.content == "Looks good"
        assert comment.author_id == "dev"
        assert event.task_id == task.id

    def test_empty_comment(self):
        project = _project()
        result = task_service.add_comment(_task(project), project, "dev", "   ")
        assert isinstance(result.error, InvalidInput)

    def test_outsider_cannot_comment(self):
        project = _project()
        result = task_service.add_comment(_task(project), project, "stranger", "hi")
        assert isinstance(result.error, Forbidden)
