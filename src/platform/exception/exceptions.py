class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    error_kind: str = 'Error'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    error_kind = 'DomainError'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    error_kind = 'Forbidden'

    def __init__(self, message: str = 'Forbidden') -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    error_kind = 'NotFound'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    error_kind = 'Conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    error_kind = 'Unauthorized'

    def __init__(self, message: str = 'Unauthorized') -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    error_kind = 'LoginFailed'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ReservationLimitExceededError(DomainError):
    error_kind = 'LimitExceeded'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class OutsideOperatingHoursError(DomainError):
    error_kind = 'OutOfHours'

    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class StoreError(CustomBaseError):
    error_kind = 'StoreError'

    def __init__(self, message: str = 'Store operation failed') -> None:
        super().__init__(message, 503)


class StoreTimeoutError(StoreError):
    error_kind = 'Timeout'

    def __init__(self, message: str = 'Store operation timed out') -> None:
        CustomBaseError.__init__(self, message, 504)
