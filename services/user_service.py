"""
User Service
Queries scoped to the authenticated user.
"""

from typing import List

from models import db, Task
from services.task_query_builder import TaskQueryBuilder
from services.task_service import get_user_or_404


def get_tasks(user) -> List[Task]:
    """Tasks currently assigned to ``user``."""
    found = get_user_or_404(user)
    return list(db.session.scalars(TaskQueryBuilder.get_assigned_tasks_query(found.id)).all())
