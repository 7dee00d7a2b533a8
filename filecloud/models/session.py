# filecloud/models/session.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from filecloud.models.database import Base


class AuthSession(Base):
    """Opaque login token bound to a user.

    Lives in its own table so credentials are never mutated by login/logout.
    """

    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="session")

    def __repr__(self):
        return f"<AuthSession {self.token[:8]} for User {self.user_id}>"
