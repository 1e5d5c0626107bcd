"""Error response construction for API endpoints."""

from fastapi.responses import JSONResponse

from clawapi.core.errors import ClawAPIError


class ErrorResponseBuilder:
    """Centralized builder for consistent error responses across all endpoints.

    Error response format:
    {
        "error": {
            "message": "<error_message>"
        }
    }

    Upstream failures of every kind share status 500 on the wire; the
    distinguishing ErrorType is only logged.
    """

    @staticmethod
    def build(status_code: int, message: str) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"error": {"message": message}})

    @staticmethod
    def bad_request(message: str) -> JSONResponse:
        return ErrorResponseBuilder.build(400, message)

    @staticmethod
    def from_exception(exc: ClawAPIError) -> JSONResponse:
        """Map a gateway exception to its status code, message verbatim."""
        return ErrorResponseBuilder.build(exc.status_code, exc.message)

    @staticmethod
    def internal_error(message: str) -> JSONResponse:
        return ErrorResponseBuilder.build(500, message)
