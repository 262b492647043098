"""
Task Service
Creation, listing, updates, assignment, tagging and deletion of tasks with
ownership rules enforced for the acting user.
"""

import logging
from typing import Dict, Any, List

from sqlalchemy.orm import joinedload, selectinload

from models import db, Task, User, TaskStatus
from services.errors import NotFoundError, UnauthorizedError
from services.notification_service import notification_service
from services.task_query_builder import TaskQueryBuilder
from utils.request_validation import TaskFilter

logger = logging.getLogger(__name__)


def get_task_or_404(task_id: str) -> Task:
    task = db.session.get(
        Task,
        task_id,
        options=[
            joinedload(Task.creator),
            joinedload(Task.assigned_to),
            selectinload(Task.comments),
        ],
    )
    if task is None:
        raise NotFoundError(f"Task with id:#{task_id} not found")
    return task


def get_user_or_404(user) -> User:
    """Re-resolve the acting user from the store."""
    found = db.session.get(User, user.id) if user is not None else None
    if found is None:
        raise NotFoundError(f"User with ID {getattr(user, 'id', None)} not found")
    return found


def list_tasks(filters: TaskFilter) -> List[Task]:
    stmt = TaskQueryBuilder.get_filtered_tasks_query(filters)
    return list(db.session.scalars(stmt).all())


class TaskService:

    def create(self, user, fields: Dict[str, Any]) -> Task:
        creator = get_user_or_404(user)

        task = Task(
            title=fields['title'],
            description=fields['description'],
            due_date=fields['due_date'],
            status=fields.get('status') or TaskStatus.TO_DO.value,
            creator=creator,
        )
        task.add_tags(fields.get('tags') or [])

        db.session.add(task)
        db.session.commit()

        logger.info(f"Task {task.id} created by user {creator.id}")
        return task

    def find_all(self, filters: TaskFilter) -> List[Task]:
        return list_tasks(filters)

    def find_one(self, task_id: str) -> Task:
        return get_task_or_404(task_id)

    def update(self, user, task_id: str, fields: Dict[str, Any]) -> Task:
        """Apply a partial update. Only the creator may edit a task."""
        task = get_task_or_404(task_id)
        acting_user = get_user_or_404(user)

        if not task.is_creator(acting_user):
            logger.warning(f"User {acting_user.id} tried to update task {task_id} they did not create")
            raise UnauthorizedError('You cannot update a task you did not create')

        previous_status = task.status
        for key, value in fields.items():
            if key == 'tags':
                task.tags = []
                task.add_tags(value)
            else:
                setattr(task, key, value)

        db.session.commit()
        logger.info(f"Task {task_id} updated by user {acting_user.id}: {sorted(fields)}")

        if task.status != previous_status:
            notification_service.notify_status_change(task, task.status)

        return task

    def update_status(self, user, task_id: str, new_status: str) -> Dict[str, str]:
        """
        Change a task's status as its creator or assignee, then notify both.

        Notifications are written after the status commit; a failure there
        leaves the new status in place.
        """
        task = get_task_or_404(task_id)
        acting_user = get_user_or_404(user)

        if not (task.is_assignee(acting_user) or task.is_creator(acting_user)):
            logger.warning(f"User {acting_user.id} tried to change status of task {task_id} without access")
            raise UnauthorizedError(
                'You cannot update the status of a task that was not created/assigned to you'
            )

        task.status = new_status
        db.session.commit()
        logger.info(f"Task {task_id} status set to {new_status} by user {acting_user.id}")

        notification_service.notify_status_change(task, new_status)

        return {'newStatus': task.status}

    def remove(self, user, task_id: str) -> None:
        task = get_task_or_404(task_id)

        if not task.is_creator(user):
            logger.warning(f"User {getattr(user, 'id', None)} tried to delete task {task_id} they did not create")
            raise UnauthorizedError('You cannot delete a task you did not create')

        db.session.delete(task)
        db.session.commit()
        logger.info(f"Task {task_id} deleted by user {user.id}")

    def add_tags(self, task_id: str, tags: List[str]) -> List[str]:
        task = get_task_or_404(task_id)
        merged = task.add_tags(tags)
        db.session.commit()
        return merged

    def assign_task(self, task_id: str, email: str) -> Task:
        """
        Assign a task to the user with ``email`` and notify them.

        Reassigning an assigned task or assigning the creator is allowed;
        the previous assignee is not told.
        """
        task = get_task_or_404(task_id)

        assignee = db.session.scalars(
            db.select(User).where(User.email == email)
        ).first()
        if assignee is None:
            raise NotFoundError(f"User with email:{email} not found")

        task.assigned_to = assignee
        db.session.commit()
        logger.info(f"Task {task_id} assigned to user {assignee.id}")

        notification_service.notify_assignment(task, assignee)

        return task


task_service = TaskService()
