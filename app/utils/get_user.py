from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.exceptions import AppException
from app.core.security import decode_user_id
from app.constants.error_codes import ErrorCode
from app.repositories.user_repository import UserRepository
from app.repositories.log_repository import LogRepository
from app.services.users.user_services import UserService
from app.utils.logger import get_logger

logger = get_logger("auth.guard")


def get_bearer_token(authorization: str | None = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        logger.warning("Missing bearer token")
        raise AppException("Invalid authorization header", ErrorCode.UNAUTHORIZED)

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AppException("Invalid authorization header", ErrorCode.UNAUTHORIZED)
    return token


async def get_current_user_id(
    request: Request,
    token: str = Depends(get_bearer_token),
) -> int:
    """Resolve the caller's user id from the bearer token.

    The account itself is looked up by the operation, so a valid token for a
    missing user reaches the service and gets its "no user" answer there.
    """
    user_id = decode_user_id(token)
    request.state.user_id = user_id
    return user_id


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db, UserRepository(db), LogRepository(db))
