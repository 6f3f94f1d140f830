# app/repositories/user_repository.py
# Data access for users only. Transactions are committed by the service layer.

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.users.user_models import User


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self,
        user_id: int,
        *,
        include_deleted: bool = False,
        with_logs: bool = False,
    ) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)

        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))

        if with_logs:
            stmt = stmt.options(selectinload(User.logs)).execution_options(
                populate_existing=True
            )

        return await self.db.scalar(stmt)

    async def get_by_email(self, email: str) -> Optional[User]:
        # soft-deleted rows keep their email reserved
        return await self.db.scalar(select(User).where(User.email == email))

    async def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update_fields(self, user_id: int, values: dict) -> None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(**values)
        )

    async def soft_delete(self, user_id: int) -> None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id, User.deleted_at.is_(None))
            # lifecycle transitions are not edits
            .values(deleted_at=datetime.now(timezone.utc), updated_at=User.updated_at)
        )

    async def hard_delete(self, user_id: int) -> None:
        await self.db.execute(delete(User).where(User.id == user_id))

    async def restore(self, user_id: int) -> None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(deleted_at=None, updated_at=User.updated_at)
        )
