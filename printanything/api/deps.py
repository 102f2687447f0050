"""Request dependencies."""

from fastapi import Request

from core import TemplateStore
from printanything.editor import RecentNames


def get_store(request: Request) -> TemplateStore:
    """The template store configured on the application."""
    return request.app.state.store


def get_recent_names(request: Request) -> RecentNames:
    return request.app.state.recent_names
