"""API routers."""

from printanything.api.routes import convert, templates

__all__ = ["convert", "templates"]
