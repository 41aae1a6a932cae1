"""Application exception types."""

from lostpet.schemas.error import ErrorResponse, FieldError


class ApiError(Exception):
    """Structured API error that maps directly to the ``{error, status}`` envelope."""

    def __init__(self, status_code: int, field: str, message: str) -> None:
        self.status_code = status_code
        self.field_errors = [FieldError(field=field, error=message)]
        super().__init__(message)

    @property
    def payload(self) -> ErrorResponse:
        return ErrorResponse(error=self.field_errors, status=self.status_code)


class NotFoundError(ApiError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(status_code=404, field="-", message=message)


class ConflictError(ApiError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(status_code=409, field=field, message=message)


class InvalidCredentialsError(ApiError):
    def __init__(self) -> None:
        super().__init__(status_code=400, field="-", message="Please check your credentials")


class FieldValidationError(ApiError):
    """Carries one entry per rejected field."""

    def __init__(self, errors: list[FieldError], status_code: int = 422) -> None:
        super().__init__(status_code=status_code, field=errors[0].field, message=errors[0].error)
        self.field_errors = list(errors)


__all__ = [
    "ApiError",
    "ConflictError",
    "FieldValidationError",
    "InvalidCredentialsError",
    "NotFoundError",
]
