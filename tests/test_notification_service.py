"""
Notification persistence and best-effort real-time delivery.
"""
from models import Notification
from services.notification_broadcaster import (
    NOTIFICATION_EVENT,
    NOTIFICATIONS_NAMESPACE,
    NotificationBroadcaster,
    user_room,
)
from services.notification_service import (
    notification_service,
    status_change_message,
    assignment_message,
)


def test_message_formats():
    assert status_change_message('Report', 'Completed') == (
        'The status of task "Report" has been updated to "Completed"'
    )
    assert assignment_message('Report') == 'You have been assigned to task "Report"'


def test_create_notification_persists_and_pushes(db_session, creator, mocker):
    push = mocker.patch.object(NotificationBroadcaster, 'push', return_value=True)

    notification = notification_service.create_notification(creator, 'Hello')

    stored = db_session.get(Notification, notification.id)
    assert stored.user_id == creator.id
    assert stored.message == 'Hello'
    push.assert_called_once_with(creator.id, notification.to_dict())


def test_push_failure_keeps_notification(db_session, creator, mocker):
    mocker.patch.object(NotificationBroadcaster, 'push', side_effect=RuntimeError('socket down'))

    notification_service.create_notification(creator, 'Still stored')

    assert [n.message for n in db_session.query(Notification).all()] == ['Still stored']


def test_status_change_fans_out_once_per_user(db_session, creator, assignee, make_task, mocker):
    push = mocker.patch.object(NotificationBroadcaster, 'push', return_value=True)
    task = make_task(creator, title='Report', assigned_to=assignee)

    sent = notification_service.notify_status_change(task, 'Completed')

    assert [n.user_id for n in sent] == [assignee.id, creator.id]
    assert push.call_count == 2


def test_broadcaster_emits_to_user_room(mocker):
    socketio = mocker.Mock()
    mocker.patch.object(NotificationBroadcaster, '_socketio', socketio)

    assert NotificationBroadcaster.push('abc', {'message': 'hi'}) is True

    socketio.emit.assert_called_once_with(
        NOTIFICATION_EVENT,
        {'message': 'hi'},
        to=user_room('abc'),
        namespace=NOTIFICATIONS_NAMESPACE,
    )


def test_broadcaster_without_server_skips(mocker):
    mocker.patch.object(NotificationBroadcaster, '_socketio', None)

    assert NotificationBroadcaster.push('abc', {'message': 'hi'}) is False
