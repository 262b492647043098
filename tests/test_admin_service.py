"""
Admin task and comment management bypasses ownership checks.
"""
import pytest

from models import Comment, Notification, Task
from services.admin_service import admin_service
from services.comment_service import comment_service
from services.errors import NotFoundError
from utils.request_validation import TaskFilter


class TestAdminTasks:

    def test_lists_everyones_tasks(self, db_session, creator, outsider, make_task):
        make_task(creator, title='First')
        make_task(outsider, title='Second')

        tasks = admin_service.get_tasks(TaskFilter(sort_by='title'))

        assert [t.title for t in tasks] == ['First', 'Second']

    def test_status_update_notifies_creator_and_assignee(self, db_session, creator, assignee, make_task):
        task = make_task(creator, title='Audit', assigned_to=assignee)

        updated = admin_service.update_task_status(task.id, 'In-Progress')

        assert updated.status == 'In-Progress'
        recipients = {n.user_id for n in db_session.query(Notification).all()}
        assert recipients == {creator.id, assignee.id}

    def test_delete_any_task(self, db_session, creator, make_task):
        task = make_task(creator)
        task_id = task.id

        admin_service.delete_task_by_id(task_id)

        assert db_session.get(Task, task_id) is None

    def test_missing_task(self, db_session):
        with pytest.raises(NotFoundError):
            admin_service.get_task_by_id('missing')
        with pytest.raises(NotFoundError):
            admin_service.delete_task_by_id('missing')


class TestAdminComments:

    def test_delete_comment_of_any_author(self, db_session, creator, assignee, make_task):
        task = make_task(creator)
        comment = comment_service.create_comment(assignee, task.id, 'Spam')
        comment_id = comment.id

        admin_service.delete_task_comment(task.id, comment_id)

        assert db_session.get(Comment, comment_id) is None
        assert admin_service.get_task_comments(task.id) == []

    def test_comment_on_another_task_is_not_found(self, db_session, creator, assignee, make_task):
        first = make_task(creator, title='First')
        second = make_task(creator, title='Second')
        comment = comment_service.create_comment(assignee, first.id, 'On first')

        with pytest.raises(NotFoundError):
            admin_service.delete_task_comment(second.id, comment.id)

        assert db_session.get(Comment, comment.id) is not None
