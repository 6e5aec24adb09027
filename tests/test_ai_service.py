"""Tests for the AI service with a fake completion client."""

import asyncio
import json
from datetime import UTC, datetime, timedelta

from taskflow.application import ai_service
from taskflow.application.ai_service import ChatContext
from taskflow.domain.shared import Err, Ok, Priority
from taskflow.infrastructure.ai import MockCompletionClient, mock_chat_reply, mock_tasks


def _now():
    return datetime.now(UTC)


class TestFormatProject:
    def test_summary_fields(self, workspace, owner, member, project):
        workspace.add_member(project.id, owner.id, member.id)
        workspace.create_task(owner.id, project.id, "Late", due_date=_now() - timedelta(days=2))
        project = workspace.get_project(project.id, owner.id).value
        tasks = workspace.list_tasks(owner.id, project_id=project.id).value

        data = ai_service.format_project_for_ai(project, tasks, _now())

        assert data["name"] == "Website redesign"
        assert data["taskCount"] == 1
        assert data["completedTasks"] == 0
        assert data["overdueTasks"] == 1
        assert data["teamSize"] == 2
        assert data["tasks"][0]["title"] == "Late"
        json.dumps(data)


class TestInsights:
    def test_returns_text_with_metrics(self, workspace, owner, project):
        client = MockCompletionClient(response="Looks healthy.")
        now = _now()
        health = workspace.project_health(project.id, owner.id, now).value

        result = asyncio.run(ai_service.project_insights(client, project, [], health, now))

        assert isinstance(result, Ok)
        assert result.value.insights == "Looks healthy."
        assert result.value.metrics == health
        assert result.value.generated_at == now
        [call] = client.calls
        assert call["temperature"] == 0.3
        assert call["max_tokens"] == 800
        assert "Website redesign" in call["prompt"]
        assert "No deadline set" in call["prompt"]

    def test_completion_failure(self, workspace, owner, project):
        client = MockCompletionClient(error="timed out")
        now = _now()
        health = workspace.project_health(project.id, owner.id, now).value

        result = asyncio.run(ai_service.project_insights(client, project, [], health, now))

        assert result == Err("timed out")


class TestSuggestions:
    def test_parses_and_cleans(self):
        reply = json.dumps(
            [
                {"title": "Plan", "priority": "HIGH", "estimatedHours": 3, "tags": ["a"]},
                {"priority": "CRITICAL", "estimatedHours": "lots", "tags": "x"},
            ]
        )
        client = MockCompletionClient(response=f"```json\n{reply}\n```")

        result = asyncio.run(ai_service.suggest_tasks(client, "Launch", timeline="Q4"))

        first, second = result.value.tasks
        assert (first.title, first.priority, first.estimated_hours, first.tags) == (
            "Plan",
            Priority.HIGH,
            3,
            ["a"],
        )
        assert second.title == "Untitled Task"
        assert second.priority == Priority.MEDIUM
        assert second.estimated_hours == 1
        assert second.tags == []
        assert "Timeline: Q4" in result.value.context
        assert client.calls[0]["max_tokens"] == 1500

    def test_structured_priority_falls_back_to_medium(self):
        reply = json.dumps([{"title": "A", "priority": ["HIGH"]}, {"title": "B", "priority": {"x": 1}}])
        client = MockCompletionClient(response=reply)

        result = asyncio.run(ai_service.suggest_tasks(client, "Launch"))

        assert [task.priority for task in result.value.tasks] == [Priority.MEDIUM, Priority.MEDIUM]
        assert ai_service.clean_suggested_task({"priority": {"x": 1}}).priority == Priority.MEDIUM

    def test_non_array_is_rejected(self):
        client = MockCompletionClient(response='{"title": "Plan"}')
        result = asyncio.run(ai_service.suggest_tasks(client, "Launch"))
        assert result == Err("Invalid AI response format")

    def test_prose_is_rejected(self):
        client = MockCompletionClient(response="Sure! Here are some tasks.")
        assert isinstance(asyncio.run(ai_service.suggest_tasks(client, "Launch")), Err)

    def test_mock_templates(self):
        suggestions = ai_service.suggest_tasks_mock("Shop", "website")

        assert suggestions.mock
        assert len(suggestions.tasks) == 6
        assert suggestions.tasks[0].title == "Create wireframes and user flow"
        assert suggestions.tasks[2].title == "Design homepage layout"
        assert suggestions.context == "AI-generated tasks for Shop"

    def test_mock_templates_rename_with_project_name(self):
        tasks = mock_tasks("Tracker", "mobile-app")
        assert tasks[1]["title"] == "Create user interface mockups"
        assert tasks[3]["title"] == "Implement core navigation"
        assert mock_tasks("Spring Sale", "marketing")[4]["title"] == "Launch social media spring sale"

    def test_unknown_type_uses_generic_list(self):
        titles = [t.title for t in ai_service.suggest_tasks_mock("X", "spaceship").tasks]
        assert titles[0] == "Project planning and scope definition"


class TestChat:
    def test_without_context(self, workspace, owner):
        client = MockCompletionClient(response="Do the urgent thing first.")

        result = asyncio.run(ai_service.chat(client, workspace, owner.id, "What next?"))

        assert result.value.response == "Do the urgent thing first."
        assert not result.value.has_context
        assert client.calls[0]["prompt"] == "User Question: What next?"

    def test_with_project_and_tasks(self, workspace, owner, project):
        workspace.create_task(owner.id, project.id, "Write copy")
        client = MockCompletionClient()
        context = ChatContext(project_id=project.id, include_projects=True, include_tasks=True)

        result = asyncio.run(ai_service.chat(client, workspace, owner.id, "Status?", context))

        assert result.value.has_context
        prompt = client.calls[0]["prompt"]
        assert "Current Project Context" in prompt
        assert "User's Projects Summary" in prompt
        assert "Write copy" in prompt

    def test_invisible_project_adds_no_context(self, workspace, project, outsider):
        client = MockCompletionClient()
        context = ChatContext(project_id=project.id)

        result = asyncio.run(ai_service.chat(client, workspace, outsider.id, "Hi", context))

        assert not result.value.has_context

    def test_failure(self, workspace, owner):
        client = MockCompletionClient(error="unreachable")
        result = asyncio.run(ai_service.chat(client, workspace, owner.id, "Hi"))
        assert isinstance(result, Err)


class TestMockChat:
    def test_keyword_groups(self):
        assert "prioritizing" in mock_chat_reply("What should I prioritize?", False)
        assert "Risk Assessment" in mock_chat_reply("Any problems ahead?", False)
        assert "Productivity Tips" in mock_chat_reply("Some advice please", False)
        assert "Hello!" in mock_chat_reply("hello", False)

    def test_default_quotes_message(self):
        assert 'asking about: "Budget?"' in mock_chat_reply("Budget?", False)

    def test_reply_marks_context(self):
        reply = ai_service.chat_mock("Analyze progress", ChatContext(include_projects=True))

        assert reply.mock
        assert reply.has_context
        assert "Based on your project data" in reply.response

    def test_empty_context_is_not_context(self):
        assert not ai_service.chat_mock("Budget?", ChatContext()).has_context
