from .task import Task, TaskCreate, TaskPatch, TaskStatus

__all__ = ["Task", "TaskCreate", "TaskPatch", "TaskStatus"]
