class TrackerError(Exception):
    """Base exception for business rule violations. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message())
        self.message = message or self.default_message()

    @classmethod
    def default_message(cls) -> str:
        return cls.__name__


class ValidationError(TrackerError):
    """Raised when input data is missing or violates a uniqueness rule."""

    status_code = 400


class DuplicateUsername(ValidationError):
    @classmethod
    def default_message(cls) -> str:
        return "Username already exists"


class AuthError(TrackerError):
    """Raised when login credentials are invalid."""

    status_code = 401

    @classmethod
    def default_message(cls) -> str:
        return "Invalid credentials"


class ConflictError(TrackerError):
    """Raised when a clock transition is not allowed from the current state."""

    status_code = 400


class AlreadyClockedIn(ConflictError):
    @classmethod
    def default_message(cls) -> str:
        return "Already clocked in"


class NotClockedIn(ConflictError):
    @classmethod
    def default_message(cls) -> str:
        return "Not clocked in"


class StoreError(TrackerError):
    """Raised when the database fails (connectivity, constraint, query)."""

    status_code = 500
