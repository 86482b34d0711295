"""Configuration validation for Kafka client property maps.

Rules return ValidationResult values that merge into one report listing every
violated rule; exceptions are raised only at fail-fast boundaries through
``require_valid``.
"""

from .exceptions import (
    ConfigurationException,
    InvalidPropertyValueException,
    MissingRequiredPropertyException,
    PropertyOutOfRangeException,
    require_valid,
)
from .framework import ConfigurationValidator, PropertyMap, PropertyValidator
from .result import (
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    ValidationWarning,
    ValidationWarningType,
)
from .rules import DefaultConfigurationValidator

__all__ = [
    "ConfigurationValidator",
    "DefaultConfigurationValidator",
    "PropertyMap",
    "PropertyValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
    "ValidationWarning",
    "ValidationWarningType",
    "ConfigurationException",
    "MissingRequiredPropertyException",
    "InvalidPropertyValueException",
    "PropertyOutOfRangeException",
    "require_valid",
]
