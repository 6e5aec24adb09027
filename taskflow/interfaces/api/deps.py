"""FastAPI dependencies: configuration, workspace, clock and current user."""

from collections.abc import Callable
from datetime import datetime
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request

from taskflow.application import Workspace
from taskflow.domain.shared import Err
from taskflow.domain.user import User
from taskflow.global_config import AppConfig
from taskflow.infrastructure.ai import CompletionClient


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_workspace(request: Request) -> Workspace:
    return request.app.state.workspace


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_now(request: Request) -> datetime:
    """Current instant from the app's clock."""
    clock: Callable[[], datetime] = request.app.state.clock
    return clock()


def get_current_user(
    workspace: Annotated[Workspace, Depends(get_workspace)],
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the caller from the ``X-User-Id`` header."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    result = workspace.get_user(x_user_id)
    if isinstance(result, Err):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return result.value


WorkspaceDep = Annotated[Workspace, Depends(get_workspace)]
ConfigDep = Annotated[AppConfig, Depends(get_config)]
ClientDep = Annotated[CompletionClient, Depends(get_completion_client)]
NowDep = Annotated[datetime, Depends(get_now)]
CurrentUser = Annotated[User, Depends(get_current_user)]
