from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, SoftDeleteMixin


class User(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False)
    # unique across active and soft-deleted rows; a hard delete frees it
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    logs = relationship(
        "Log",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Log.created_at, Log.id]",
        lazy="raise",
    )

    def __repr__(self):
        return f"<User id={self.id} email={self.email} deleted={self.is_deleted}>"
