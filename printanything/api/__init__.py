"""HTTP API for template preview and print-time resolution."""

from printanything.api.app import create_app

__all__ = ["create_app"]
