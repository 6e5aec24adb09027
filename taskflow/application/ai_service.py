"""AI application service.

Builds prompts from project data, calls a completion client and shapes
the replies. The mock variants return canned content with the same
shapes, so callers can switch without changing anything else.
"""

import json
import logging
import re
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from taskflow.application.workspace import Workspace
from taskflow.domain.analytics import ProjectHealth, TaskSnapshot, is_overdue
from taskflow.domain.project import Project
from taskflow.domain.shared import DomainModel, Err, Ok, Priority, Result
from taskflow.domain.task import Task, TaskStatus
from taskflow.infrastructure.ai import SYSTEM_PROMPTS, CompletionClient, mock_chat_reply, mock_tasks

logger = logging.getLogger(__name__)

INSIGHTS_TEMPERATURE = 0.3
INSIGHTS_MAX_TOKENS = 800
SUGGEST_TEMPERATURE = 0.7
SUGGEST_MAX_TOKENS = 1500
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000

CHAT_PROJECT_LIMIT = 10
CHAT_TASK_LIMIT = 20

_PRIORITY_VALUES = {priority.value for priority in Priority}
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


# =============================================================================
# Models
# =============================================================================


class ProjectInsights(DomainModel):
    """AI commentary on a project plus the metrics it was based on."""

    insights: str
    metrics: ProjectHealth
    project_data: dict[str, Any]
    generated_at: datetime


class SuggestedTask(DomainModel):
    """A task proposed by the assistant, not yet saved."""

    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    estimated_hours: float = 1
    tags: list[str] = []


class TaskSuggestions(DomainModel):
    tasks: list[SuggestedTask]
    context: str
    ai_used: bool = True
    mock: bool = False


class ChatContext(DomainModel):
    """What project data to include with a chat message."""

    project_id: str | None = None
    include_projects: bool = False
    include_tasks: bool = False

    def requested(self) -> bool:
        return bool(self.project_id or self.include_projects or self.include_tasks)


class ChatReply(DomainModel):
    response: str
    has_context: bool
    timestamp: datetime
    mock: bool = False


# =============================================================================
# Project Data
# =============================================================================


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def format_project_for_ai(project: Project, tasks: Sequence[Task], now: datetime) -> dict[str, Any]:
    """Structured project summary sent along with prompts."""
    snapshots = [TaskSnapshot.from_task(task) for task in tasks]
    return {
        "name": project.name,
        "description": project.description,
        "status": project.status.value,
        "priority": project.priority.value,
        "startDate": _iso(project.start_date),
        "endDate": _iso(project.end_date),
        "taskCount": len(tasks),
        "completedTasks": sum(1 for t in tasks if t.status == TaskStatus.DONE),
        "overdueTasks": sum(1 for s in snapshots if is_overdue(s, now)),
        "teamSize": project.team_size(),
        "tasks": [
            {
                "title": task.title,
                "status": task.status.value,
                "priority": task.priority.value,
                "dueDate": _iso(task.due_date),
                "estimatedHours": task.estimated_hours,
                "tags": task.tags,
            }
            for task in tasks
        ],
    }


def build_analysis_context(project_data: dict[str, Any], health: ProjectHealth) -> str:
    """User prompt for the insights request."""
    distribution = health.task_distribution
    deadline = (
        health.days_until_deadline
        if health.days_until_deadline is not None
        else "No deadline set"
    )
    age = health.project_age_days if health.project_age_days is not None else "unknown"
    return f"""Project Analysis Request:
{json.dumps(project_data, indent=2)}

Additional Context:
- Days until deadline: {deadline}
- Recent activity level: {health.recent_activity_count} activities in last 10 actions
- Task distribution: {distribution.todo} todo, {distribution.in_progress} in progress, {distribution.in_review} in review, {distribution.done} completed
- Project age: {age} days

Please provide actionable insights about this project's health, risks, and recommendations."""


# =============================================================================
# Insights
# =============================================================================


async def project_insights(
    client: CompletionClient,
    project: Project,
    tasks: Sequence[Task],
    health: ProjectHealth,
    now: datetime,
) -> Result[ProjectInsights, str]:
    """Ask the model to analyze a project.

    Args:
        client: Completion client to use.
        project: The project to analyze.
        tasks: The project's tasks.
        health: Metrics already computed for the project.
        now: Current instant.

    Returns:
        Ok(ProjectInsights), or Err(str) if the completion failed.
    """
    project_data = format_project_for_ai(project, tasks, now)
    result = await client.complete(
        SYSTEM_PROMPTS["PROJECT_INSIGHTS"],
        build_analysis_context(project_data, health),
        temperature=INSIGHTS_TEMPERATURE,
        max_tokens=INSIGHTS_MAX_TOKENS,
    )
    if isinstance(result, Err):
        logger.error(f"Project insights failed for {project.id}: {result.error}")
        return result

    return Ok(
        ProjectInsights(
            insights=result.value,
            metrics=health,
            project_data=project_data,
            generated_at=now,
        )
    )


# =============================================================================
# Task Suggestions
# =============================================================================


def build_suggestion_context(
    project_name: str,
    project_description: str | None = None,
    project_type: str | None = None,
    target_audience: str | None = None,
    timeline: str | None = None,
) -> str:
    return f"""Project: {project_name}
Description: {project_description or "No description provided"}
Type: {project_type or "General project"}
Target Audience: {target_audience or "Not specified"}
Timeline: {timeline or "Not specified"}

Please suggest specific, actionable tasks for this project."""


def clean_suggested_task(item: dict[str, Any]) -> SuggestedTask:
    """Coerce one model-produced task into a valid suggestion.

    Missing titles become "Untitled Task", unknown priorities become
    MEDIUM, non-numeric hours become 1 and non-list tags become empty.
    """
    hours = item.get("estimatedHours")
    if isinstance(hours, bool) or not isinstance(hours, (int, float)):
        hours = 1

    priority = item.get("priority")
    tags = item.get("tags")

    return SuggestedTask(
        title=str(item.get("title") or "Untitled Task"),
        description=str(item.get("description") or ""),
        priority=(
            priority
            if isinstance(priority, str) and priority in _PRIORITY_VALUES
            else Priority.MEDIUM
        ),
        estimated_hours=hours,
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
    )


def parse_task_suggestions(text: str) -> Result[list[SuggestedTask], str]:
    """Parse a JSON array of tasks out of a completion."""
    cleaned = _CODE_FENCE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        return Err("Invalid AI response format")

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        return Err("Invalid AI response format")
    return Ok([clean_suggested_task(item) for item in data])


async def suggest_tasks(
    client: CompletionClient,
    project_name: str,
    project_description: str | None = None,
    project_type: str | None = None,
    target_audience: str | None = None,
    timeline: str | None = None,
) -> Result[TaskSuggestions, str]:
    """Ask the model for a starter task list."""
    context = build_suggestion_context(
        project_name, project_description, project_type, target_audience, timeline
    )
    result = await client.complete(
        SYSTEM_PROMPTS["TASK_SUGGESTIONS"],
        context,
        temperature=SUGGEST_TEMPERATURE,
        max_tokens=SUGGEST_MAX_TOKENS,
    )
    if isinstance(result, Err):
        logger.error(f"Task suggestion failed: {result.error}")
        return result

    tasks = parse_task_suggestions(result.value)
    if isinstance(tasks, Err):
        logger.warning(f"Unparseable task suggestions: {result.value[:200]}")
        return tasks
    return Ok(TaskSuggestions(tasks=tasks.value, context=context))


def suggest_tasks_mock(project_name: str, project_type: str | None = None) -> TaskSuggestions:
    """Template suggestions for a project type, no model involved."""
    return TaskSuggestions(
        tasks=[clean_suggested_task(item) for item in mock_tasks(project_name, project_type)],
        context=f"AI-generated tasks for {project_name}",
        mock=True,
    )


# =============================================================================
# Chat
# =============================================================================


def build_chat_context(
    workspace: Workspace,
    user_id: str,
    context: ChatContext,
    now: datetime,
) -> str:
    """Collect the requested project data as prompt text.

    Unknown or invisible projects are skipped. Storage errors are
    logged and the affected section left out.
    """
    sections: list[str] = []

    if context.project_id:
        project = workspace.get_project(context.project_id, user_id)
        tasks = workspace.tasks.list_for_project(context.project_id)
        if isinstance(project, Ok) and isinstance(tasks, Ok):
            data = format_project_for_ai(project.value, tasks.value, now)
            sections.append(f"Current Project Context:\n{json.dumps(data, indent=2)}")

    if context.include_projects:
        projects = workspace.list_projects(user_id)
        if isinstance(projects, Ok):
            summary = []
            for project in projects.value[:CHAT_PROJECT_LIMIT]:
                tasks = workspace.tasks.list_for_project(project.id)
                data = format_project_for_ai(project, tasks.value if isinstance(tasks, Ok) else [], now)
                summary.append(
                    {
                        "name": data["name"],
                        "status": data["status"],
                        "priority": data["priority"],
                        "taskCount": data["taskCount"],
                        "completedTasks": data["completedTasks"],
                        "overdueTasks": data["overdueTasks"],
                    }
                )
            sections.append(f"User's Projects Summary:\n{json.dumps(summary, indent=2)}")
        else:
            logger.warning(f"Chat context: could not list projects: {projects.error.message}")

    if context.include_tasks:
        projects = workspace.list_projects(user_id)
        tasks = workspace.list_tasks(user_id)
        if isinstance(projects, Ok) and isinstance(tasks, Ok):
            names = {p.id: p.name for p in projects.value}
            recent = sorted(tasks.value, key=lambda t: t.updated_at, reverse=True)
            summary = [
                {
                    "title": task.title,
                    "status": task.status.value,
                    "priority": task.priority.value,
                    "project": names.get(task.project_id),
                    "dueDate": _iso(task.due_date),
                    "isOverdue": is_overdue(TaskSnapshot.from_task(task), now),
                }
                for task in recent[:CHAT_TASK_LIMIT]
            ]
            sections.append(f"User's Recent Tasks:\n{json.dumps(summary, indent=2)}")

    return "\n\n".join(sections)


async def chat(
    client: CompletionClient,
    workspace: Workspace,
    user_id: str,
    message: str,
    context: ChatContext | None = None,
    now: datetime | None = None,
) -> Result[ChatReply, str]:
    """Answer a chat message, optionally grounded in the user's data."""
    now = now or datetime.now(UTC)
    context_text = build_chat_context(workspace, user_id, context, now) if context else ""

    if context_text:
        prompt = f"Context:\n{context_text}\n\nUser Question: {message}"
    else:
        prompt = f"User Question: {message}"

    result = await client.complete(
        SYSTEM_PROMPTS["CHAT_ASSISTANT"],
        prompt,
        temperature=CHAT_TEMPERATURE,
        max_tokens=CHAT_MAX_TOKENS,
    )
    if isinstance(result, Err):
        logger.error(f"Chat completion failed: {result.error}")
        return result

    return Ok(ChatReply(response=result.value, has_context=bool(context_text), timestamp=now))


def chat_mock(message: str, context: ChatContext | None = None) -> ChatReply:
    """Keyword-matched canned reply."""
    has_context = context is not None and context.requested()
    return ChatReply(
        response=mock_chat_reply(message, has_context),
        has_context=has_context,
        timestamp=datetime.now(UTC),
        mock=True,
    )
