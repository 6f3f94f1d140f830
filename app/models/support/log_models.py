from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Log(Base, TimestampMixin):
    """Append-only activity record. Removed together with its owning user."""

    __tablename__ = "logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(String, nullable=False)

    user = relationship("User", back_populates="logs", lazy="raise")

    __table_args__ = (Index("ix_logs_user_created", "user_id", "created_at"),)

    def __repr__(self):
        return f"<Log id={self.id} user_id={self.user_id}>"
