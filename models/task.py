"""
Task Model for Multi-User Task Management
SQLAlchemy 2.0-safe model for tasks with a creator, an optional assignee, tags and comments.
"""

import uuid
from enum import Enum
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, Text, ForeignKey, JSON, Index, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB
from .base import db

# Forward reference for type checking
if TYPE_CHECKING:
    from .user import User
    from .task_comment import Comment


class TaskStatus(str, Enum):
    TO_DO = "To-Do"
    IN_PROGRESS = "In-Progress"
    COMPLETED = "Completed"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class TagList(TypeDecorator):
    """
    JSON list of tags. Uses JSONB on PostgreSQL so containment filters can use
    the @> operator, plain JSON elsewhere (SQLite in tests).
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


class Task(db.Model):
    """
    Task owned by its creator. The assignee may change its status; comments
    are deleted together with the task.
    """
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Task content
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(32), default=TaskStatus.TO_DO.value, nullable=False)
    tags: Mapped[list] = mapped_column(TagList, default=list, nullable=False)

    # Ownership
    creator_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    creator: Mapped["User"] = relationship(back_populates="created_tasks", foreign_keys=[creator_id])

    assigned_to_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"), nullable=True)
    assigned_to: Mapped[Optional["User"]] = relationship(back_populates="assigned_tasks", foreign_keys=[assigned_to_id])

    comments: Mapped[list["Comment"]] = relationship(
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('ix_tasks_status_due', 'status', 'due_date'),
        Index('ix_tasks_creator', 'creator_id'),
        Index('ix_tasks_assigned_to', 'assigned_to_id'),
    )

    def __repr__(self):
        return f'<Task {self.id}: {self.title}>'

    def is_creator(self, user) -> bool:
        return user is not None and self.creator_id == user.id

    def is_assignee(self, user) -> bool:
        return user is not None and self.assigned_to_id is not None and self.assigned_to_id == user.id

    def add_tags(self, tags):
        """Merge tags into the existing list, skipping ones already present."""
        merged = list(self.tags or [])
        for tag in tags:
            if tag not in merged:
                merged.append(tag)
        # Reassign so the JSON column is flagged dirty
        self.tags = merged
        return merged

    def to_dict(self, include_comments=False):
        """Convert task to dictionary for JSON serialization."""
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'dueDate': self.due_date.isoformat() if self.due_date else None,
            'status': self.status,
            'tags': list(self.tags or []),
            'creatorId': self.creator_id,
            'assignedToId': self.assigned_to_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
            'creator': self.creator.to_summary() if self.creator else None,
            'assignedTo': self.assigned_to.to_summary() if self.assigned_to else None,
        }

        if include_comments:
            data['comments'] = [comment.to_dict() for comment in self.comments]

        return data
