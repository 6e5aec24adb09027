"""Shared domain building blocks.

- Result monad (``Ok``/``Err``) for explicit error handling
- ``DomainEvent`` base for activity-producing events
- Enumerations shared by projects and tasks

Example usage:
    >>> from taskflow.domain.shared import Ok, Err, Result, is_ok
    >>>
    >>> def find_task(task_id: str) -> Result[dict, str]:
    ...     if task_id == "missing":
    ...         return Err("Task not found")
    ...     return Ok({"id": task_id})
"""

from taskflow.domain.shared.enums import Priority
from taskflow.domain.shared.events import DomainEvent
from taskflow.domain.shared.models import DomainModel
from taskflow.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    is_err,
    is_ok,
    map_result,
    unwrap_or,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "map_result",
    "flat_map",
    "unwrap_or",
    # Domain events
    "DomainEvent",
    # Enumerations
    "Priority",
    # Base model
    "DomainModel",
]
