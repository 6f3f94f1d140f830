from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.user_repository import UserRepository
from app.repositories.log_repository import LogRepository
from app.schemas.users.user_schemas import (
    UserCreateSchema,
    UserUpdateSchema,
    UserCreatedOut,
    UserLogsOut,
    LogOut,
)
from app.core.security import hash_password, verify_password, decode_user_id
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.update_fields import UpdateResult, update_by_fields
from app.utils.validators import validate_record, collect_fields
from app.utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Account lifecycle: create, update, soft/hard delete, restore, log listing.

    Each operation commits at most once, so the log cleanup and the user
    mutation of a delete land together or not at all.
    """

    def __init__(self, db: AsyncSession, users: UserRepository, logs: LogRepository):
        self.db = db
        self.users = users
        self.logs = logs

    # =========================
    # LOGS
    # =========================
    async def get_all_logs(self, user_id: int) -> UserLogsOut:
        user = await self.users.get(user_id, with_logs=True)
        if not user:
            raise AppException("There is no user", ErrorCode.USER_NOT_FOUND)

        if not user.logs:
            raise AppException("There are no logs", ErrorCode.NO_LOGS)

        return UserLogsOut(
            total=len(user.logs),
            logs=[
                LogOut(id=log.id, message=log.message, created_at=log.created_at)
                for log in user.logs
            ],
        )

    # =========================
    # CREATE USER
    # =========================
    async def create(self, body: dict) -> UserCreatedOut:
        payload = validate_record(UserCreateSchema, body)

        if await self.users.get_by_email(payload.email):
            raise AppException("User email already exists.", ErrorCode.USER_EMAIL_EXISTS)

        hashed = hash_password(payload.password)
        if not isinstance(hashed, str):
            raise AppException("Invalid data", ErrorCode.VALIDATION_ERROR)

        user = await self.users.create(payload.name, payload.email, hashed)
        await self.db.commit()

        logger.info("User created", extra={"user_id": user.id})
        return UserCreatedOut(
            name=user.name,
            email=user.email,
            created_at=user.created_at,
        )

    # =========================
    # UPDATE USER
    # =========================
    async def update(self, token: str, body: dict) -> UpdateResult:
        user_id = decode_user_id(token)

        if not isinstance(body, dict):
            raise AppException("Invalid data", ErrorCode.VALIDATION_ERROR)

        fields = collect_fields(UserUpdateSchema, body)
        payload = validate_record(UserUpdateSchema, body)

        user = await self.users.get(user_id)
        if not user:
            raise AppException("There is no user", ErrorCode.USER_NOT_FOUND)

        values = payload.model_dump(include=set(fields))

        # -------------------------------------------------
        # PASSWORD ROTATION
        # -------------------------------------------------
        if "old_password" in fields:
            if not verify_password(payload.old_password, user.password_hash):
                logger.warning("Password rotation refused", extra={"user_id": user_id})
                raise AppException("Password does not match", ErrorCode.PASSWORD_MISMATCH)

            hashed = hash_password(payload.new_password)
            if not isinstance(hashed, str):
                raise AppException("Invalid data", ErrorCode.VALIDATION_ERROR)

            values["password"] = hashed
            fields.append("password")

        result = await update_by_fields(self.users, user_id, fields, values)

        if result.updated:
            await self.db.commit()
            if "password" in result.updated:
                logger.info("Password rotated", extra={"user_id": user_id})

        return result

    # =========================
    # SOFT DELETE
    # =========================
    async def delete(self, user_id: int) -> str:
        user = await self.users.get(user_id)
        if not user:
            raise AppException("There is no user", ErrorCode.USER_NOT_FOUND)

        removed = await self.logs.delete_for_user(user_id)
        await self.users.soft_delete(user_id)
        await self.db.commit()

        logger.info("User soft-deleted", extra={"user_id": user_id, "logs_removed": removed})
        return "Deleted successfully"

    # =========================
    # HARD DELETE
    # =========================
    async def hard_delete(self, user_id: int) -> str:
        user = await self.users.get(user_id)
        if not user:
            raise AppException("There is no user", ErrorCode.USER_NOT_FOUND)

        removed = await self.logs.delete_for_user(user_id)
        await self.users.hard_delete(user_id)
        await self.db.commit()

        logger.warning("User permanently deleted", extra={"user_id": user_id, "logs_removed": removed})
        return "Deleted successfully, this action cannot be undone"

    # =========================
    # RESTORE
    # =========================
    async def restore(self, token: str) -> str:
        user_id = decode_user_id(token)

        user = await self.users.get(user_id, include_deleted=True)
        if not user:
            raise AppException("There is no user", ErrorCode.USER_NOT_FOUND)

        if user.is_deleted:
            await self.users.restore(user_id)
            await self.db.commit()
            logger.info("User restored", extra={"user_id": user_id})

        return "User restored successfully."
