"""
User Model for Task Management
SQLAlchemy 2.0-safe model for registered users who create, receive and discuss tasks.
"""

import uuid
from typing import TYPE_CHECKING
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime
from .base import db

if TYPE_CHECKING:
    from .task import Task
    from .task_comment import Comment
    from .notification import Notification


class User(UserMixin, db.Model):
    """
    Regular account. Creates tasks, gets tasks assigned, writes comments
    and receives notifications.
    """
    __tablename__ = "users"

    principal_type = "user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(120), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    created_tasks: Mapped[list["Task"]] = relationship(
        back_populates="creator", foreign_keys="Task.creator_id"
    )
    assigned_tasks: Mapped[list["Task"]] = relationship(
        back_populates="assigned_to", foreign_keys="Task.assigned_to_id"
    )
    comments: Mapped[list["Comment"]] = relationship(back_populates="author")
    notifications: Mapped[list["Notification"]] = relationship(back_populates="user")

    def __repr__(self):
        return f'<User {self.email}>'

    def get_id(self):
        # Users and admins live in separate tables; keep their ids apart
        return f"{self.principal_type}:{self.id}"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_summary(self):
        """Compact representation embedded in task and comment payloads."""
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
        }

    def to_dict(self):
        data = self.to_summary()
        data['createdAt'] = self.created_at.isoformat() if self.created_at else None
        data['updatedAt'] = self.updated_at.isoformat() if self.updated_at else None
        return data
