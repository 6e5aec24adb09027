"""Tests for the pure project service."""

from datetime import timedelta

from taskflow.application import Forbidden, InvalidInput
from taskflow.application import project_service as svc
from taskflow.domain.project import MemberRole, ProjectStatus
from taskflow.domain.shared import Err, Ok, Priority
from taskflow.domain.task import Task, TaskStatus
from tests.conftest import NOW


def _project(**fields):
    return svc.create_project("owner", "Launch", now=NOW, **fields).value[0]


def _with_member(project, user_id, role):
    return svc.add_member(project, "owner", user_id, role, now=NOW).value[0]


class TestCreate:
    def test_creates_project_and_event(self):
        result = svc.create_project("owner", "  Launch  ", now=NOW, priority=Priority.HIGH)

        assert isinstance(result, Ok)
        project, event = result.value
        assert project.name == "Launch"
        assert project.owner_id == "owner"
        assert project.priority == Priority.HIGH
        assert project.status == ProjectStatus.PLANNING
        assert project.created_at == project.updated_at == NOW
        assert event.project_id == project.id
        assert event.actor_id == "owner"

    def test_blank_name(self):
        assert isinstance(svc.create_project("owner", "   ").error, InvalidInput)

    def test_name_too_long(self):
        result = svc.create_project("owner", "x" * 101)
        assert isinstance(result.error, InvalidInput)
        assert "name" in result.error.message

    def test_unknown_field(self):
        result = svc.create_project("owner", "Launch", budget=10)
        assert result.error == InvalidInput("Unknown project fields: budget")


class TestPermissions:
    def test_owner_can_do_everything(self):
        project = _project()
        assert svc.can_view(project, "owner")
        assert svc.can_manage(project, "owner")
        assert svc.can_delete(project, "owner")

    def test_plain_member_can_only_view(self):
        project = _with_member(_project(), "m", MemberRole.MEMBER)
        assert svc.can_view(project, "m")
        assert not svc.can_manage(project, "m")
        assert not svc.can_delete(project, "m")

    def test_manager_can_manage_but_not_delete(self):
        project = _with_member(_project(), "m", MemberRole.MANAGER)
        assert svc.can_manage(project, "m")
        assert not svc.can_delete(project, "m")

    def test_stranger_sees_nothing(self):
        assert not svc.can_view(_project(), "stranger")


class TestUpdate:
    def test_owner_updates(self):
        later = NOW + timedelta(hours=1)

        updated, event = svc.update_project(
            _project(), "owner", {"status": ProjectStatus.ACTIVE, "name": " Relaunch "}, later
        ).value

        assert updated.status == ProjectStatus.ACTIVE
        assert updated.name == "Relaunch"
        assert updated.updated_at == later
        assert updated.created_at == NOW
        assert event.changed == ["name", "status"]

    def test_admin_member_updates(self):
        project = _with_member(_project(), "a", MemberRole.ADMIN)
        assert isinstance(svc.update_project(project, "a", {"color": "#000000"}), Ok)

    def test_plain_member_cannot_update(self):
        project = _with_member(_project(), "m", MemberRole.MEMBER)
        result = svc.update_project(project, "m", {"name": "Mine now"})
        assert isinstance(result.error, Forbidden)

    def test_invalid_value(self):
        result = svc.update_project(_project(), "owner", {"name": ""})
        assert isinstance(result.error, InvalidInput)

    def test_unknown_field(self):
        result = svc.update_project(_project(), "owner", {"owner_id": "me"})
        assert isinstance(result.error, InvalidInput)


class TestDelete:
    def test_only_owner_deletes(self):
        project = _with_member(_project(), "a", MemberRole.ADMIN)
        assert isinstance(svc.delete_project(project, "a").error, Forbidden)
        assert svc.delete_project(project, "owner").value.project_id == project.id


class TestMembers:
    def test_add_member(self):
        project, event = svc.add_member(_project(), "owner", "m", MemberRole.MANAGER, NOW).value

        assert project.member("m").role == MemberRole.MANAGER
        assert project.team_size() == 2
        assert event.user_id == "m"

    def test_duplicate_member(self):
        project = _with_member(_project(), "m", MemberRole.MEMBER)
        assert isinstance(svc.add_member(project, "owner", "m").error, InvalidInput)

    def test_owner_cannot_join_own_project(self):
        assert isinstance(svc.add_member(_project(), "owner", "owner").error, InvalidInput)

    def test_plain_member_cannot_add(self):
        project = _with_member(_project(), "m", MemberRole.MEMBER)
        assert isinstance(svc.add_member(project, "m", "x").error, Forbidden)

    def test_remove_member(self):
        project = _with_member(_project(), "m", MemberRole.MEMBER)

        updated, _ = svc.remove_member(project, "owner", "m", NOW).value

        assert updated.member("m") is None

    def test_remove_unknown_member(self):
        assert isinstance(svc.remove_member(_project(), "owner", "m"), Err)


def test_project_summary_progress():
    project = _project()
    tasks = [
        Task(id=f"t{i}", title="t", status=s, project_id=project.id, created_at=NOW, updated_at=NOW)
        for i, s in enumerate([TaskStatus.DONE, TaskStatus.TODO, TaskStatus.TODO])
    ]

    summary = svc.get_project_summary(project, tasks)

    assert summary.task_count == 3
    assert summary.completed_tasks == 1
    assert summary.progress_percent == 33


def test_empty_project_summary():
    assert svc.get_project_summary(_project(), []).progress_percent == 0
