"""
Comment Model - Discussion on tasks
Every comment has exactly one author and belongs to exactly one task.
"""

import uuid
from typing import TYPE_CHECKING
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, Text, ForeignKey
from .base import db

if TYPE_CHECKING:
    from .user import User
    from .task import Task


class Comment(db.Model):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Task relationship
    task_id: Mapped[str] = mapped_column(
        ForeignKey('tasks.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    task: Mapped["Task"] = relationship(back_populates="comments")

    # Author information
    author_id: Mapped[str] = mapped_column(
        ForeignKey('users.id'),
        nullable=False,
        index=True
    )
    author: Mapped["User"] = relationship(back_populates="comments")

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Comment task_id={self.task_id} author_id={self.author_id}>'

    def to_dict(self):
        """Convert comment to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'taskId': self.task_id,
            'content': self.content,
            'author': self.author.to_summary() if self.author else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
