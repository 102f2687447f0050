"""Template storage backends."""

from printanything.database.connection import get_db
from printanything.database.memory import MemoryTemplateStore
from printanything.database.templates import SqliteTemplateStore

__all__ = ["MemoryTemplateStore", "SqliteTemplateStore", "get_db"]
