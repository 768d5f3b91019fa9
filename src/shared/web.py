"""Accessors for the objects the composition root stores on ``app.state``."""

from fastapi import Request

from shared.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dispatcher(request: Request):
    """The process-wide ``NotificationDispatcher``."""
    return request.app.state.dispatcher
