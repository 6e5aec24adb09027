"""HTTP API for TaskFlow.

Exports the FastAPI router and app factory.
"""

from taskflow.interfaces.api.routes import create_app, router

__all__ = ["router", "create_app"]
