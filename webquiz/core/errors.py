"""Failures raised by the services; the app maps each one to an HTTP status."""

from fastapi import status


class QuizEngineError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    headers: dict[str, str] | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticatedError(QuizEngineError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class PermissionDeniedError(QuizEngineError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(QuizEngineError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidAnswerIndexError(QuizEngineError):
    """An answer index that does not point at one of the quiz's options."""

    def __init__(self, message: str, invalid: set[int] | None = None):
        super().__init__(message)
        self.invalid = invalid or set()


class RegistrationError(QuizEngineError):
    pass
