"""
Notification Model
Append-only record of messages sent to a user.
"""

import uuid
from typing import TYPE_CHECKING
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, Text, ForeignKey
from .base import db

if TYPE_CHECKING:
    from .user import User


class Notification(db.Model):
    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    message: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    user: Mapped["User"] = relationship(back_populates="notifications")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Notification user_id={self.user_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'message': self.message,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
