"""Domain-specific exceptions. Pure domain layer — no infrastructure."""

from datetime import timedelta


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(DomainError):
    """Raised when a required string is empty or an identity is missing."""


class InvalidRangeError(DomainError):
    """Raised when a pagination window has end <= start."""


class CooldownActiveError(DomainError):
    """Raised when a requester asks for access again inside the cooldown window."""

    def __init__(self, message: str, retry_after: timedelta) -> None:
        self.retry_after = retry_after
        super().__init__(message)
