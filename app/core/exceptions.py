from app.constants.error_codes import ErrorCode


class AppException(Exception):
    """Expected domain failure. Mapped to an HTTP status by the error handlers."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details
