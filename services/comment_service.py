"""
Comment Service
Authors create, edit and delete their own comments on tasks.
"""

import logging
from typing import List

from sqlalchemy.orm import joinedload

from models import db, Comment, Task
from services.errors import NotFoundError, UnauthorizedError
from services.task_service import get_task_or_404, get_user_or_404

logger = logging.getLogger(__name__)


def get_comment_or_404(comment_id: str) -> Comment:
    comment = db.session.get(
        Comment,
        comment_id,
        options=[joinedload(Comment.author), joinedload(Comment.task)],
    )
    if comment is None:
        raise NotFoundError(f"Comment with ID {comment_id} not found.")
    return comment


def detach_and_delete(comment: Comment) -> None:
    """
    Remove a comment from its task's collection and from the store.
    Shared by author and admin deletion.
    """
    task: Task = comment.task
    if task is not None and comment in task.comments:
        task.comments.remove(comment)
    db.session.delete(comment)
    db.session.commit()


class CommentService:

    def list_comments(self, task_id: str) -> List[Comment]:
        return list(get_task_or_404(task_id).comments)

    def create_comment(self, user, task_id: str, content: str) -> Comment:
        task = get_task_or_404(task_id)
        author = get_user_or_404(user)

        comment = Comment(content=content, author=author)
        task.comments.append(comment)
        db.session.commit()

        logger.info(f"Comment {comment.id} added to task {task_id} by user {author.id}")
        return comment

    def update_comment(self, user, comment_id: str, content: str) -> Comment:
        comment = get_comment_or_404(comment_id)
        acting_user = get_user_or_404(user)

        if comment.author_id != acting_user.id:
            logger.warning(f"User {acting_user.id} tried to edit comment {comment_id} by {comment.author_id}")
            raise UnauthorizedError('You can only update your own comments.')

        comment.content = content
        db.session.commit()
        return comment

    def delete_comment(self, user, comment_id: str) -> None:
        comment = get_comment_or_404(comment_id)
        acting_user = get_user_or_404(user)

        if comment.author_id != acting_user.id:
            logger.warning(f"User {acting_user.id} tried to delete comment {comment_id} by {comment.author_id}")
            raise UnauthorizedError('You can only delete your own comments.')

        detach_and_delete(comment)
        logger.info(f"Comment {comment_id} deleted by its author {acting_user.id}")


comment_service = CommentService()
