"""Exceptions raised by Print-Anything collaborators.

The core itself never raises for malformed amounts or missing references;
these cover the storage boundary only.
"""


class PrintAnythingError(Exception):
    """Base exception for all Print-Anything errors."""

    pass


class StoreError(PrintAnythingError):
    """Raised by a template store when a load or save cannot complete."""

    def __init__(self, message: str, template_id: str | None = None):
        self.template_id = template_id
        super().__init__(message)


class TemplateNotFoundError(StoreError):
    """Raised when a template id does not exist in the store."""

    def __init__(self, template_id: str):
        super().__init__(f"Template not found: {template_id}", template_id=template_id)
