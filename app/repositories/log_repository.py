# app/repositories/log_repository.py

from typing import List

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.support.log_models import Log


class LogRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: int) -> List[Log]:
        result = await self.db.execute(
            select(Log)
            .where(Log.user_id == user_id)
            .order_by(Log.created_at, Log.id)
        )
        return list(result.scalars().all())

    async def append(self, user_id: int, message: str) -> Log:
        log = Log(user_id=user_id, message=message)
        self.db.add(log)
        await self.db.flush()
        return log

    async def delete_for_user(self, user_id: int) -> int:
        result = await self.db.execute(delete(Log).where(Log.user_id == user_id))
        return result.rowcount or 0
