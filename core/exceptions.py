"""Application-wide exception classes."""

from __future__ import annotations


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class ValidationError(ApplicationError):
    """Raised when data validation fails."""
    pass


class InvalidInputError(ValidationError):
    """Raised when a purchase line cannot be parsed into a name and a count."""
    pass


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class RaffleError(ServiceError):
    """Base exception for raffle operations."""
    pass


class DrawNotOpenError(RaffleError):
    """Raised when a purchase or settlement is attempted with no open draw."""

    def __init__(self, message: str = "Draw has not started") -> None:
        super().__init__(message)


class TicketLimitError(InvalidInputError):
    """Raised when a purchase would take a buyer past the per-draw ticket cap."""

    def __init__(self, limit: int, remaining: int) -> None:
        self.limit = limit
        self.remaining = remaining
        if remaining <= 0:
            message = f"You have already purchased the maximum number of tickets ({limit}) in this draw."
        else:
            suffix = "s" if remaining > 1 else ""
            message = f"You can only purchase {remaining} more ticket{suffix} in this draw."
        super().__init__(message)
