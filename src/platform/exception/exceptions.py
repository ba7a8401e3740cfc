class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: str | None = None
    log_level: str = 'ERROR'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class BusinessRejection(DomainError):
    """Expected negative outcome returned to the caller as-is, never logged as an error"""

    code = 'REJECTED'
    log_level = 'INFO'


class ForbiddenError(BusinessRejection):
    code = 'FORBIDDEN'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = 'NOT_FOUND'
    log_level = 'WARNING'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = 'CONFLICT'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class TransientError(CustomBaseError):
    """Retryable fault - the caller should try again later"""

    code = 'TRY_AGAIN'
    log_level = 'WARNING'
    retry_after_seconds: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class AuthenticationError(CustomBaseError):
    code = 'NOT_AUTHENTICATED'
    log_level = 'WARNING'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    code = 'LOGIN_BAD_CREDENTIALS'
    log_level = 'WARNING'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)
