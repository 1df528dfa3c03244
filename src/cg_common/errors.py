"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User — descriptive, message is safe to show to the caller
  9xxx: System — masked, message is generic and the cause is only logged

`message` is always the user-visible text. Internal detail never goes into it.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class NotFoundError(AppError):
    def __init__(self, message: str = "User not found") -> None:
        super().__init__(1001, message, 404)


class InvalidCredentialsError(AppError):
    def __init__(self, message: str = "Invalid password") -> None:
        super().__init__(1002, message, 401)


class DuplicateUserError(AppError):
    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(1003, message, 409)


# --- 9xxx: System ---

class HashingError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Error hashing password", 500)


class ComparisonError(AppError):
    def __init__(self) -> None:
        super().__init__(9002, "Error comparing password", 500)

