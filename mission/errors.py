class MissionError(Exception):
    """Base exception for mission control domain errors."""

    pass


class ValidationError(MissionError):
    """Raised when a required argument is missing or an enum value is unrecognized."""

    pass


class NotFoundError(MissionError):
    """Raised when an identifier, fragment, or name does not resolve to a record."""

    pass


class AmbiguousIdError(NotFoundError):
    """Raised when a strict suffix lookup matches more than one record."""

    pass


class StoreError(MissionError):
    """Raised when the underlying store call fails.

    Carries the store's status (HTTP status code, or None for local errors).
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is None:
            return base
        return f"[{self.status}] {base}"
