"""
Tests for custom exceptions.
"""
import pytest
from noise_directivity.utils.exceptions import (
    DirectivityError,
    ConfigurationError,
    DataValidationError,
    FrequencyAxisError,
)


def test_base_exception():
    """Test base exception."""
    with pytest.raises(DirectivityError):
        raise DirectivityError("Base error")


def test_configuration_error():
    """Test configuration error."""
    with pytest.raises(ConfigurationError):
        raise ConfigurationError("Invalid config")

    # Should also be catchable as base class
    with pytest.raises(DirectivityError):
        raise ConfigurationError("Invalid config")


def test_data_validation_error():
    """Test data validation error with details."""
    error = DataValidationError(
        "Validation failed",
        invalid_rows=12,
        details={'theta': 4.0}
    )

    assert error.invalid_rows == 12
    assert error.details['theta'] == 4.0
    assert "invalid_rows=12" in str(error)


def test_data_validation_error_without_rows():
    """Row count is omitted from the message when zero."""
    error = DataValidationError("Validation failed")
    assert str(error) == "Validation failed"
    assert error.details == {}


def test_frequency_axis_error():
    """Test frequency axis error keeps the rejected axis."""
    error = FrequencyAxisError("Duplicate frequency", (100.0, 100.0))
    assert error.frequencies == [100.0, 100.0]
    assert FrequencyAxisError("Empty").frequencies == []


def test_exception_inheritance():
    """Test that all custom exceptions inherit from base."""
    exceptions = [
        ConfigurationError,
        DataValidationError,
        FrequencyAxisError,
    ]

    for exc_class in exceptions:
        assert issubclass(exc_class, DirectivityError)
