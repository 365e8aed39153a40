"""ASGI entrypoint for RoutineFlow."""

from .application import app, create_app

__all__ = ["app", "create_app"]
