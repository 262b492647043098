"""
Notification Service
Records notifications for users and forwards them to the real-time channel.
"""

import logging
from typing import List, Optional

from models import db, Notification, User
from services.notification_broadcaster import notification_broadcaster

logger = logging.getLogger(__name__)


def status_change_message(title: str, new_status: str) -> str:
    return f'The status of task "{title}" has been updated to "{new_status}"'


def assignment_message(title: str) -> str:
    return f'You have been assigned to task "{title}"'


class NotificationService:

    def create_notification(self, user: User, message: str) -> Notification:
        """
        Persist a notification, then try to push it in real time.

        The database write is committed before the push and is the only
        guaranteed side effect; push errors are logged and dropped.
        """
        notification = Notification(user_id=user.id, message=message)
        db.session.add(notification)
        db.session.commit()

        try:
            notification_broadcaster.push(user.id, notification.to_dict())
        except Exception as e:
            logger.warning(f"Real-time notification to user {user.id} failed (non-blocking): {e}")

        return notification

    def notify_status_change(self, task, new_status: str) -> List[Notification]:
        """Notify the assignee and the creator of a task once each."""
        message = status_change_message(task.title, new_status)
        return [
            self.create_notification(recipient, message)
            for recipient in self._interested_users(task.assigned_to, task.creator)
        ]

    def notify_assignment(self, task, assignee: User) -> Notification:
        return self.create_notification(assignee, assignment_message(task.title))

    @staticmethod
    def _interested_users(*users: Optional[User]) -> List[User]:
        seen = set()
        recipients = []
        for user in users:
            if user is None or user.id in seen:
                continue
            seen.add(user.id)
            recipients.append(user)
        return recipients


notification_service = NotificationService()
