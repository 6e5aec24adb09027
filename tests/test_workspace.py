"""Tests for the Workspace: persistence, visibility and activity logging."""

from datetime import UTC, datetime, timedelta

from taskflow.application import Forbidden, InvalidInput, NotFound, Workspace
from taskflow.domain.activity import ActivityType
from taskflow.domain.analytics import ConfigurationError
from taskflow.domain.project import MemberRole
from taskflow.domain.shared import Ok
from taskflow.domain.task import TaskStatus


class TestUsers:
    def test_duplicate_email_is_rejected(self, workspace, owner):
        result = workspace.register_user("Someone", "OLIVIA@example.com")
        assert isinstance(result.error, InvalidInput)

    def test_invalid_email(self, workspace):
        assert isinstance(workspace.register_user("Nobody", "not-an-email").error, InvalidInput)

    def test_unknown_user(self, workspace):
        assert isinstance(workspace.get_user("missing").error, NotFound)


class TestProjects:
    def test_create_persists_and_logs(self, workspace, owner, project):
        reloaded = Workspace(workspace.data_dir)

        assert reloaded.get_project(project.id, owner.id) == Ok(project)
        activity = reloaded.recent_activity(project.id, owner.id).value
        assert [a.type for a in activity] == [ActivityType.PROJECT_CREATED]

    def test_invisible_project_is_not_found(self, workspace, project, outsider):
        assert isinstance(workspace.get_project(project.id, outsider.id).error, NotFound)
        assert isinstance(workspace.recent_activity(project.id, outsider.id).error, NotFound)

    def test_recent_activity_honours_zero_limit(self, workspace, owner, project):
        assert workspace.recent_activity(project.id, owner.id, limit=0) == Ok([])
        assert len(workspace.recent_activity(project.id, owner.id, limit=None).value) == 1

    def test_member_sees_project(self, workspace, owner, member, project):
        workspace.add_member(project.id, owner.id, member.id)

        assert [p.id for p in workspace.list_projects(member.id).value] == [project.id]

    def test_add_unknown_user(self, workspace, owner, project):
        result = workspace.add_member(project.id, owner.id, "ghost")
        assert isinstance(result.error, NotFound)

    def test_member_cannot_update(self, workspace, owner, member, project):
        workspace.add_member(project.id, owner.id, member.id)
        result = workspace.update_project(project.id, member.id, {"name": "Hijacked"})
        assert isinstance(result.error, Forbidden)

    def test_update_logs_activity(self, workspace, owner, project):
        workspace.update_project(project.id, owner.id, {"description": "New scope"})

        latest = workspace.recent_activity(project.id, owner.id).value[0]

        assert latest.type == ActivityType.PROJECT_UPDATED

    def test_delete_removes_everything(self, workspace, owner, project):
        task = workspace.create_task(owner.id, project.id, "Draft").value

        assert workspace.delete_project(project.id, owner.id) == Ok(None)

        assert isinstance(workspace.get_project(project.id, owner.id).error, NotFound)
        assert isinstance(workspace.get_task(task.id, owner.id).error, NotFound)

    def test_manager_cannot_delete(self, workspace, owner, member, project):
        workspace.add_member(project.id, owner.id, member.id, MemberRole.MANAGER)
        assert isinstance(workspace.delete_project(project.id, member.id).error, Forbidden)

    def test_summaries(self, workspace, owner, project):
        task = workspace.create_task(owner.id, project.id, "Draft").value
        workspace.create_task(owner.id, project.id, "Review")
        workspace.update_task(task.id, owner.id, {"status": TaskStatus.DONE})

        [summary] = workspace.list_project_summaries(owner.id).value

        assert summary.task_count == 2
        assert summary.completed_tasks == 1
        assert summary.progress_percent == 50


class TestTasks:
    def test_create_on_missing_project(self, workspace, owner):
        assert isinstance(workspace.create_task(owner.id, "nope", "Draft").error, NotFound)

    def test_create_on_invisible_project_is_forbidden(self, workspace, project, outsider):
        result = workspace.create_task(outsider.id, project.id, "Draft")
        assert isinstance(result.error, Forbidden)

    def test_invisible_task_is_not_found(self, workspace, owner, outsider, project):
        task = workspace.create_task(owner.id, project.id, "Draft").value

        assert isinstance(workspace.get_task(task.id, outsider.id).error, NotFound)
        assert isinstance(workspace.update_task(task.id, outsider.id, {}).error, NotFound)

    def test_list_filters(self, workspace, owner, member, project):
        workspace.add_member(project.id, owner.id, member.id)
        mine = workspace.create_task(owner.id, project.id, "Mine", assignee_id=member.id).value
        workspace.create_task(owner.id, project.id, "Unassigned")

        assigned = workspace.list_tasks(member.id, assignee_id=member.id).value

        assert [t.id for t in assigned] == [mine.id]
        assert len(workspace.list_tasks(owner.id, project_id=project.id).value) == 2

    def test_completion_is_logged(self, workspace, owner, project):
        task = workspace.create_task(owner.id, project.id, "Draft").value
        workspace.update_task(task.id, owner.id, {"status": TaskStatus.DONE})

        types = [a.type for a in workspace.recent_activity(project.id, owner.id).value]

        assert ActivityType.TASK_COMPLETED in types
        assert ActivityType.TASK_CREATED in types

    def test_delete_task_removes_comments(self, workspace, owner, project):
        task = workspace.create_task(owner.id, project.id, "Draft").value
        workspace.add_comment(task.id, owner.id, "first")

        assert workspace.delete_task(task.id, owner.id) == Ok(None)
        assert workspace.comments.list_for_task(project.id, task.id).value == []

    def test_comments(self, workspace, owner, member, project):
        workspace.add_member(project.id, owner.id, member.id)
        task = workspace.create_task(owner.id, project.id, "Draft").value

        workspace.add_comment(task.id, member.id, "On it")

        [comment] = workspace.list_comments(task.id, owner.id).value
        assert comment.content == "On it"
        assert comment.author_id == member.id


class TestAnalytics:
    # Records are stamped with the real clock, so analytics must run after them.
    def test_project_health_counts_recent_activity(self, workspace, owner, project):
        task = workspace.create_task(
            owner.id, project.id, "Late", due_date=datetime.now(UTC) - timedelta(days=1)
        ).value
        workspace.create_task(owner.id, project.id, "Later")
        workspace.update_task(task.id, owner.id, {"title": "Very late"})

        health = workspace.project_health(project.id, owner.id, datetime.now(UTC)).value

        # created project + two tasks + one update
        assert health.recent_activity_count == 4
        assert health.total_tasks == 2
        assert health.overdue_tasks == 1

    def test_activity_count_is_capped(self, tmp_path, owner):
        workspace = Workspace(tmp_path / "data", recent_activity_limit=3)
        workspace.users.save(owner)
        project = workspace.create_project(owner.id, "Busy").value
        for n in range(5):
            workspace.create_task(owner.id, project.id, f"Task {n}")

        health = workspace.project_health(project.id, owner.id, datetime.now(UTC)).value

        assert health.recent_activity_count == 3

    def test_health_requires_aware_clock(self, workspace, owner, project):
        result = workspace.project_health(project.id, owner.id, datetime.now())
        assert isinstance(result.error, ConfigurationError)

    def test_dashboard_only_counts_visible_work(self, workspace, owner, outsider, project):
        workspace.create_task(owner.id, project.id, "Mine")
        other = workspace.create_project(outsider.id, "Elsewhere").value
        workspace.create_task(outsider.id, other.id, "Theirs")

        summary = workspace.dashboard_summary(owner.id, datetime.now(UTC)).value
        analytics = workspace.dashboard_analytics(owner.id, datetime.now(UTC)).value

        assert summary.project_count == 1
        assert summary.active_task_count == 1
        assert analytics.tasks.total == 1
        assert analytics.projects.planning == 1
