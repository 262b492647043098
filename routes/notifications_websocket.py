"""
Notifications WebSocket Namespace

Clients connect with their access token as Socket.IO auth
(``{"token": "<jwt>"}``) and are placed in a per-user room that the
notification broadcaster emits into.
"""

import logging
from flask import request
from flask_socketio import emit, join_room

from models import User
from services.notification_broadcaster import NOTIFICATIONS_NAMESPACE, user_room
from utils.auth import resolve_principal

logger = logging.getLogger(__name__)


def get_socket_sid() -> str:
    """Get Socket.IO session ID from request context."""
    return request.sid  # type: ignore[attr-defined]


def register_notifications_namespace(socketio):
    """
    Register notification namespace handlers.

    Namespace: /notifications
    Events:
    - connect: authenticate and join the user's room
    - disconnect: log only
    """

    @socketio.on('connect', namespace=NOTIFICATIONS_NAMESPACE)
    def handle_notifications_connect(auth=None):
        token = (auth or {}).get('token') if isinstance(auth, dict) else None
        principal = resolve_principal(token) if token else None

        if not isinstance(principal, User):
            logger.warning(f"Refused notifications connection {get_socket_sid()}: no valid user token")
            return False

        join_room(user_room(principal.id))
        logger.info(f"Notifications client {get_socket_sid()} joined {user_room(principal.id)}")
        emit('connected', {
            'message': 'Connected to notifications namespace',
            'userId': principal.id,
        })

    @socketio.on('disconnect', namespace=NOTIFICATIONS_NAMESPACE)
    def handle_notifications_disconnect(*args):
        logger.info(f"Notifications client disconnected: {get_socket_sid()}")
