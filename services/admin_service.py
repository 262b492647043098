"""
Admin Service
Task and comment management for administrators. No ownership checks apply;
access is gated at the route by the admin role.
"""

import logging
from typing import List

from models import db, Task, Comment
from services.comment_service import get_comment_or_404, detach_and_delete
from services.errors import NotFoundError
from services.notification_service import notification_service
from services.task_service import get_task_or_404, list_tasks
from utils.request_validation import TaskFilter

logger = logging.getLogger(__name__)


class AdminService:

    def get_tasks(self, filters: TaskFilter) -> List[Task]:
        return list_tasks(filters)

    def get_task_by_id(self, task_id: str) -> Task:
        return get_task_or_404(task_id)

    def update_task_status(self, task_id: str, new_status: str) -> Task:
        task = get_task_or_404(task_id)

        task.status = new_status
        db.session.commit()
        logger.info(f"Admin set task {task_id} status to {new_status}")

        notification_service.notify_status_change(task, new_status)
        return task

    def delete_task_by_id(self, task_id: str) -> None:
        task = get_task_or_404(task_id)
        db.session.delete(task)
        db.session.commit()
        logger.info(f"Admin deleted task {task_id}")

    def get_task_comments(self, task_id: str) -> List[Comment]:
        return list(get_task_or_404(task_id).comments)

    def delete_task_comment(self, task_id: str, comment_id: str) -> None:
        get_task_or_404(task_id)
        comment = get_comment_or_404(comment_id)

        if comment.task_id != task_id:
            raise NotFoundError(f"Comment with ID {comment_id} not found.")

        detach_and_delete(comment)
        logger.info(f"Admin deleted comment {comment_id} from task {task_id}")


admin_service = AdminService()
