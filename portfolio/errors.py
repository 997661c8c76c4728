"""Error taxonomy shared by services and routers.

Services raise these; the handlers registered in ``portfolio.main`` turn them
into ``{"message": ...}`` JSON bodies with the matching status code.
"""
from typing import Optional


class PortfolioError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(PortfolioError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(PortfolioError):
    status_code = 401
    default_message = "Not authenticated"


class NotFound(PortfolioError):
    status_code = 404
    default_message = "Not found"


class ConflictError(PortfolioError):
    status_code = 409
    default_message = "Already exists"


class PayloadTooLarge(PortfolioError):
    status_code = 400
    default_message = "File too large"


class UnsupportedMediaType(PortfolioError):
    status_code = 400
    default_message = "Unsupported file type"


class ServerError(PortfolioError):
    status_code = 500


__all__ = [
    "PortfolioError",
    "ValidationError",
    "Unauthorized",
    "NotFound",
    "ConflictError",
    "PayloadTooLarge",
    "UnsupportedMediaType",
    "ServerError",
]
