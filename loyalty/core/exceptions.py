# loyalty/core/exceptions.py

from fastapi import HTTPException
from loyalty.constants.error_codes import ErrorCode


class AppException(HTTPException):
    """Service-level error rendered as the standard error envelope."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details

    @property
    def message(self) -> str:
        return self.detail


class NotFoundException(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(404, message, error_code)
