"""FastAPI routes for TaskFlow."""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Any, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskflow import __version__
from taskflow.application import Forbidden, InvalidInput, NotFound, Workspace
from taskflow.application import ai_service
from taskflow.domain.activity import Activity
from taskflow.domain.analytics import AnalyticsError, DashboardSummary
from taskflow.domain.project import Project, ProjectSummary
from taskflow.domain.shared import Err, Result
from taskflow.domain.task import Comment, Task, TaskStatus
from taskflow.domain.user import User
from taskflow.global_config import AIProvider, AppConfig, get_global_config
from taskflow.infrastructure.ai import CompletionClient, OllamaStatus, create_completion_client
from taskflow.interfaces.api.deps import (
    ClientDep,
    ConfigDep,
    CurrentUser,
    NowDep,
    WorkspaceDep,
)
from taskflow.interfaces.api.schemas import (
    AddMemberRequest,
    AIStatusResponse,
    AnalyticsResponse,
    ChatRequest,
    CreateCommentRequest,
    CreateProjectRequest,
    CreateTaskRequest,
    CreateUserRequest,
    MessageResponse,
    ProjectHealthResponse,
    ProjectInsightsRequest,
    SuggestTasksRequest,
    TaskDetail,
    UpdateProjectRequest,
    UpdateTaskRequest,
)

logger = logging.getLogger(__name__)


def _unwrap(result: Result[Any, Any]) -> Any:
    """Return the Ok value or raise the matching HTTP error."""
    if not isinstance(result, Err):
        return result.value

    error = result.error
    if isinstance(error, AnalyticsError):
        raise HTTPException(
            status_code=422,
            detail={"error": "Metrics unavailable", "details": error.to_dict()},
        )
    if isinstance(error, NotFound):
        raise HTTPException(status_code=404, detail=error.message)
    if isinstance(error, Forbidden):
        raise HTTPException(status_code=403, detail=error.message)
    if isinstance(error, InvalidInput):
        raise HTTPException(
            status_code=400, detail={"error": "Invalid input", "details": [error.message]}
        )
    logger.error(f"Unhandled service error: {error}")
    raise HTTPException(status_code=500, detail="Internal server error")


# =============================================================================
# Router
# =============================================================================


router = APIRouter(prefix="/api")


# =============================================================================
# Users
# =============================================================================


@router.post("/users", response_model=User, status_code=201)
def create_user(req: CreateUserRequest, workspace: WorkspaceDep):
    """Register a user. Authentication itself happens elsewhere."""
    return _unwrap(workspace.register_user(req.name, req.email))


@router.get("/users/me", response_model=User)
def get_me(user: CurrentUser):
    return user


# =============================================================================
# Projects
# =============================================================================


@router.get("/projects", response_model=list[ProjectSummary])
def list_projects(user: CurrentUser, workspace: WorkspaceDep):
    """List projects the user owns or belongs to, with progress."""
    return _unwrap(workspace.list_project_summaries(user.id))


@router.post("/projects", response_model=Project, status_code=201)
def create_project(req: CreateProjectRequest, user: CurrentUser, workspace: WorkspaceDep):
    fields = req.model_dump(exclude={"name"})
    return _unwrap(workspace.create_project(user.id, req.name, **fields))


@router.get("/projects/{project_id}", response_model=Project)
def get_project(project_id: str, user: CurrentUser, workspace: WorkspaceDep):
    return _unwrap(workspace.get_project(project_id, user.id))


@router.put("/projects/{project_id}", response_model=Project)
def update_project(
    project_id: str, req: UpdateProjectRequest, user: CurrentUser, workspace: WorkspaceDep
):
    changes = req.model_dump(exclude_unset=True)
    return _unwrap(workspace.update_project(project_id, user.id, changes))


@router.delete("/projects/{project_id}", response_model=MessageResponse)
def delete_project(project_id: str, user: CurrentUser, workspace: WorkspaceDep):
    _unwrap(workspace.delete_project(project_id, user.id))
    return MessageResponse(message="Project deleted successfully")


@router.post("/projects/{project_id}/members", response_model=Project, status_code=201)
def add_member(
    project_id: str, req: AddMemberRequest, user: CurrentUser, workspace: WorkspaceDep
):
    return _unwrap(workspace.add_member(project_id, user.id, req.user_id, req.role))


@router.delete("/projects/{project_id}/members/{member_id}", response_model=Project)
def remove_member(project_id: str, member_id: str, user: CurrentUser, workspace: WorkspaceDep):
    return _unwrap(workspace.remove_member(project_id, user.id, member_id))


@router.get("/projects/{project_id}/activities", response_model=list[Activity])
def list_activities(
    project_id: str,
    user: CurrentUser,
    workspace: WorkspaceDep,
    limit: Annotated[Optional[int], Query(ge=1, le=100)] = None,
):
    """Most recent activity log entries, newest first."""
    return _unwrap(workspace.recent_activity(project_id, user.id, limit))


@router.get("/projects/{project_id}/health", response_model=ProjectHealthResponse)
def get_project_health(project_id: str, user: CurrentUser, workspace: WorkspaceDep, now: NowDep):
    """Health score, completion and overdue rates, weekly productivity."""
    health = _unwrap(workspace.project_health(project_id, user.id, now))
    return ProjectHealthResponse.from_health(project_id, health)


# =============================================================================
# Tasks
# =============================================================================


@router.get("/tasks", response_model=list[Task])
def list_tasks(
    user: CurrentUser,
    workspace: WorkspaceDep,
    project_id: Annotated[Optional[str], Query(alias="projectId")] = None,
    assignee_id: Annotated[Optional[str], Query(alias="assigneeId")] = None,
    status: Optional[TaskStatus] = None,
):
    """Tasks in visible projects, highest priority then newest first."""
    return _unwrap(workspace.list_tasks(user.id, project_id, assignee_id, status))


@router.post("/tasks", response_model=Task, status_code=201)
def create_task(req: CreateTaskRequest, user: CurrentUser, workspace: WorkspaceDep):
    fields = req.model_dump(exclude={"title", "project_id"})
    return _unwrap(workspace.create_task(user.id, req.project_id, req.title, **fields))


@router.get("/tasks/{task_id}", response_model=TaskDetail)
def get_task(task_id: str, user: CurrentUser, workspace: WorkspaceDep):
    task = _unwrap(workspace.get_task(task_id, user.id))
    comments = _unwrap(workspace.list_comments(task_id, user.id))
    return TaskDetail(**task.model_dump(), comments=comments)


@router.put("/tasks/{task_id}", response_model=Task)
def update_task(task_id: str, req: UpdateTaskRequest, user: CurrentUser, workspace: WorkspaceDep):
    changes = req.model_dump(exclude_unset=True)
    return _unwrap(workspace.update_task(task_id, user.id, changes))


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, user: CurrentUser, workspace: WorkspaceDep):
    _unwrap(workspace.delete_task(task_id, user.id))
    return MessageResponse(message="Task deleted successfully")


@router.post("/tasks/{task_id}/comments", response_model=Comment, status_code=201)
def add_comment(
    task_id: str, req: CreateCommentRequest, user: CurrentUser, workspace: WorkspaceDep
):
    return _unwrap(workspace.add_comment(task_id, user.id, req.content))


# =============================================================================
# Analytics
# =============================================================================


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(user: CurrentUser, workspace: WorkspaceDep, now: NowDep):
    """Cross-project analytics for everything the user can see."""
    analytics = _unwrap(workspace.dashboard_analytics(user.id, now))
    return AnalyticsResponse.from_analytics(analytics, now)


@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(user: CurrentUser, workspace: WorkspaceDep, now: NowDep):
    return _unwrap(workspace.dashboard_summary(user.id, now))


# =============================================================================
# AI
# =============================================================================


@router.post("/ai/project-insights", response_model=ai_service.ProjectInsights)
async def project_insights(
    req: ProjectInsightsRequest,
    user: CurrentUser,
    workspace: WorkspaceDep,
    client: ClientDep,
    now: NowDep,
):
    """AI analysis of a project, returned with its health metrics."""
    project = _unwrap(workspace.get_project(req.project_id, user.id))
    tasks = _unwrap(workspace.list_tasks(user.id, project_id=project.id))
    health = _unwrap(workspace.project_health(project.id, user.id, now))

    result = await ai_service.project_insights(client, project, tasks, health, now)
    if isinstance(result, Err):
        raise HTTPException(status_code=500, detail="Failed to generate project insights")
    return result.value


@router.post("/ai/suggest-tasks", response_model=ai_service.TaskSuggestions)
async def suggest_tasks(req: SuggestTasksRequest, user: CurrentUser, client: ClientDep):
    result = await ai_service.suggest_tasks(
        client,
        req.project_name,
        req.project_description,
        req.project_type,
        req.target_audience,
        req.timeline,
    )
    if isinstance(result, Err):
        raise HTTPException(status_code=500, detail="Failed to generate task suggestions")
    return result.value


@router.post("/ai/suggest-tasks/mock", response_model=ai_service.TaskSuggestions)
def suggest_tasks_mock(req: SuggestTasksRequest, user: CurrentUser):
    """Template task suggestions; no model is called."""
    return ai_service.suggest_tasks_mock(req.project_name, req.project_type)


@router.post("/ai/chat", response_model=ai_service.ChatReply)
async def chat(
    req: ChatRequest,
    user: CurrentUser,
    workspace: WorkspaceDep,
    client: ClientDep,
    now: NowDep,
):
    result = await ai_service.chat(client, workspace, user.id, req.message, req.context, now)
    if isinstance(result, Err):
        raise HTTPException(status_code=500, detail="Failed to process chat message")
    return result.value


@router.post("/ai/chat-mock", response_model=ai_service.ChatReply)
def chat_mock(req: ChatRequest, user: CurrentUser):
    return ai_service.chat_mock(req.message, req.context)


@router.get("/ai/status", response_model=AIStatusResponse)
async def ai_status(config: ConfigDep, client: ClientDep, user: CurrentUser):
    """Which completion provider is configured and whether it is reachable."""
    provider = config.ai.provider
    match provider:
        case AIProvider.LOCAL:
            details = await OllamaStatus(config.ai.ollama_url).report(config.ai.local_model)
            available = details["available"]
        case AIProvider.OPENAI:
            details = {"baseUrl": config.ai.openai_base_url}
            available = bool(config.ai.openai_api_key)
        case _:
            details = {}
            available = True

    return AIStatusResponse(
        provider=provider.value,
        model=client.model,
        available=available,
        details=details,
    )


# =============================================================================
# App
# =============================================================================


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid input", "details": jsonable_encoder(exc.errors())},
        )


def create_app(
    config: AppConfig | None = None,
    completion_client: CompletionClient | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Settings to use; loaded from ~/.taskflow when omitted.
        completion_client: Client for the AI routes; built from the
            config's AI provider when omitted.
        clock: Source of the current instant for analytics.
    """
    config = config or get_global_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.ai.provider == AIProvider.LOCAL:
            if await OllamaStatus(config.ai.ollama_url).check_ollama_status():
                logger.info(f"Ollama reachable at {config.ai.ollama_url}")
            else:
                logger.warning("Ollama is not running. AI features will return errors.")
                logger.warning("Start Ollama with 'ollama serve' or set TASKFLOW_AI_PROVIDER=mock.")
        yield

    app = FastAPI(
        title="TaskFlow",
        description="Project and task dashboard with health analytics",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.workspace = Workspace(config.data_dir, config.recent_activity_limit)
    app.state.completion_client = completion_client or create_completion_client(config.ai)
    app.state.clock = clock or (lambda: datetime.now(UTC))

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(router)

    @app.get("/")
    def root():
        return {"name": "TaskFlow", "version": __version__}

    return app
