"""
Task Manager data models.
"""

from .base import Base, db
from .user import User
from .admin import Admin, AdminRole
from .task import Task, TaskStatus
from .task_comment import Comment
from .notification import Notification

__all__ = [
    'Base',
    'db',
    'User',
    'Admin',
    'AdminRole',
    'Task',
    'TaskStatus',
    'Comment',
    'Notification',
]
