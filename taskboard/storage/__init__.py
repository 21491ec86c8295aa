from .locks import ReadWriteLock
from .task_store import InMemoryTaskStore, TaskStore

__all__ = ["InMemoryTaskStore", "ReadWriteLock", "TaskStore"]
