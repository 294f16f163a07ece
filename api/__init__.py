"""
Todo List API package.

Provides the FastAPI application for the task-management backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
