"""Collaborator interfaces.

Storage lives outside the core. Anything that can fetch and persist a
Template satisfies TemplateStore; the editing session converts its
exceptions into result values.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from core.types import PrintRecord, Template


@runtime_checkable
class TemplateStore(Protocol):
    """Persistence backend for templates and their print history."""

    def get_template(self, template_id: str) -> Template | None:
        """Return the template, or None when it does not exist.

        Raises:
            StoreError: backend unavailable
        """
        ...

    def save_template(self, template: Template) -> str:
        """Persist the template and return its id.

        Raises:
            StoreError: backend unavailable or write rejected
        """
        ...

    def delete_template(self, template_id: str) -> bool:
        """Delete a template; False when it did not exist."""
        ...

    def list_templates(self, owner_id: str | None = None) -> list[Template]:
        """Templates owned by owner_id plus public ones, newest first."""
        ...

    def save_print_record(self, record: PrintRecord) -> str:
        """Persist a print record and return its id."""
        ...

    def get_print_history(
        self,
        template_id: str | None = None,
        user_id: str | None = None,
        limit: int = 50,
    ) -> list[PrintRecord]:
        """Print records, newest first, optionally for one template or user."""
        ...


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a template into a session."""

    success: bool
    template: Template | None = None
    error: str | None = None
    not_found: bool = False


@dataclass(frozen=True)
class SaveResult:
    """Outcome of saving a session's template."""

    success: bool
    template_id: str | None = None
    error: str | None = None
