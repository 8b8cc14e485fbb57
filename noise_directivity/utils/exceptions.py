"""
Custom exception hierarchy for the directivity engine.

All custom exceptions inherit from DirectivityError for easy catching.
Query operations never raise these: only construction-time input
validation and configuration loading do.
"""


class DirectivityError(Exception):
    """Base exception for all directivity engine errors."""
    pass


class ConfigurationError(DirectivityError):
    """Configuration-related errors.

    Raised when configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("Config root must be a mapping, got list")
    """
    pass


class DataValidationError(DirectivityError):
    """Directivity sample validation errors.

    Raised when input samples fail validation checks.

    Attributes:
        invalid_rows: Number of samples that failed validation
        details: Dictionary with validation error details
    """

    def __init__(self, message: str, invalid_rows: int = 0, details: dict = None):
        super().__init__(message)
        self.invalid_rows = invalid_rows
        self.details = details or {}

    def __str__(self):
        base = super().__str__()
        if self.invalid_rows > 0:
            return f"{base} (invalid_rows={self.invalid_rows})"
        return base


class FrequencyAxisError(DirectivityError):
    """Malformed frequency axis.

    Raised at construction when the supported frequencies are empty,
    non-finite, not strictly ascending or contain duplicates.

    Attributes:
        frequencies: The rejected axis
    """

    def __init__(self, message: str, frequencies=None):
        super().__init__(message)
        self.frequencies = list(frequencies) if frequencies is not None else []
