from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.exceptions import AppException
from app.core.security import decode_user_id
from app.repositories.log_repository import LogRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)

LOGGED_METHODS = {"POST", "PATCH"}


class ActivityLoggerMiddleware(BaseHTTPMiddleware):
    """Append a Log row for every successful mutating request of a known user.

    DELETE is never recorded: deleting an account removes its logs.
    """

    def __init__(self, app, session_factory):
        super().__init__(app)
        self.session_factory = session_factory

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if request.method not in LOGGED_METHODS:
            return response

        # 204 is how a missing account is reported
        if not 200 <= response.status_code < 300 or response.status_code == 204:
            return response

        user_id = getattr(request.state, "user_id", None) or self._token_user_id(request)
        if user_id is None:
            return response  # unauthenticated action → ignore

        message = f"{request.method} {request.url.path}"

        # own session, never the request's
        async with self.session_factory() as db:
            try:
                await LogRepository(db).append(user_id, message)
                await db.commit()
            except Exception:
                # recording activity must not break the response
                logger.exception("Failed to log user activity", extra={"user_id": user_id})

        return response

    @staticmethod
    def _token_user_id(request: Request):
        authorization = request.headers.get("authorization", "")
        if not authorization.startswith("Bearer "):
            return None

        try:
            return decode_user_id(authorization[len("Bearer "):].strip())
        except AppException:
            return None
