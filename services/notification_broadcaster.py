"""
Notification Broadcaster
========================
Pushes persisted notifications to connected clients over Socket.IO.
Each user listens in its own room so delivery is keyed by recipient id.
"""

import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)

NOTIFICATIONS_NAMESPACE = '/notifications'
NOTIFICATION_EVENT = 'notification'


def user_room(user_id: str) -> str:
    return f"user_{user_id}"


class NotificationBroadcaster:
    """
    Real-time side of the notification sink.

    Delivery is best-effort: callers treat the database row as the record of
    truth and only log failures raised here.
    """

    _socketio = None

    @classmethod
    def init_app(cls, socketio) -> None:
        """Initialize with Flask-SocketIO instance."""
        cls._socketio = socketio
        logger.info("NotificationBroadcaster initialized")

    @classmethod
    def push(cls, user_id: str, payload: Dict[str, Any]) -> bool:
        """
        Emit a notification to the recipient's room.

        Returns:
            True if handed to Socket.IO, False if no server is configured
        """
        if not cls._socketio:
            logger.warning("SocketIO not initialized, skipping notification push")
            return False

        cls._socketio.emit(
            NOTIFICATION_EVENT,
            payload,
            to=user_room(user_id),
            namespace=NOTIFICATIONS_NAMESPACE,
        )
        logger.debug(f"Notification pushed to {user_room(user_id)}")
        return True


notification_broadcaster = NotificationBroadcaster()
