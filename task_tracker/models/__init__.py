# This file ensures all models are loaded together to resolve circular references
from .user import User
from .project import Project, Tag
from .task import Task, TaskTag, TaskStatus, TaskPriority

__all__ = ["User", "Project", "Tag", "Task", "TaskTag", "TaskStatus", "TaskPriority"]
