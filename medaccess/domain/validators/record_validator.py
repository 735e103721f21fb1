"""Validators for governance inputs. Pure functions, no infrastructure or state access."""

from medaccess.domain.exceptions import InvalidInputError, InvalidRangeError


def validate_identity(identity: str | None, field: str = "identity") -> None:
    """Reject the null/zero identity (None, empty or whitespace). Raises InvalidInputError."""
    if identity is None or not identity.strip():
        raise InvalidInputError(f"{field} must be a non-empty identity")


def validate_non_empty(value: str | None, field: str) -> None:
    """Required strings must carry content. Raises InvalidInputError if empty."""
    if value is None or not value.strip():
        raise InvalidInputError(f"{field} must not be empty")


def validate_record_inputs(data_hash: str, description: str) -> None:
    validate_non_empty(data_hash, "data_hash")
    validate_non_empty(description, "description")


def validate_range(start: int, end: int) -> None:
    """
    Pagination window must satisfy end > start, checked before any clamping.
    Negative offsets are rejected as invalid input.
    """
    if start < 0 or end < 0:
        raise InvalidInputError(f"start and end must be non-negative, got start={start}, end={end}")
    if end <= start:
        raise InvalidRangeError(f"end must be greater than start, got start={start}, end={end}")
