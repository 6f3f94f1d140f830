import time
import uuid

from fastapi import Request

from app.utils.logger import get_logger

logger = get_logger("access")


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers["X-Request-ID"] = request_id

    logger.info(
        "%s %s",
        request.method,
        request.url.path,
        extra={
            "request_id": request_id,
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": elapsed_ms,
        },
    )

    return response
