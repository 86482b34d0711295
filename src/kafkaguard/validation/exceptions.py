"""Exceptions raised at fail-fast validation boundaries.

Rules never raise; a ConfigurationException wraps the ValidationResult of a
rejected configuration so a caller can inspect every error, warning and
recovery suggestion. The named subclasses let call sites catch a specific
failure kind without walking the error list.
"""

import logging
from collections.abc import Sequence
from typing import Any

from .result import (
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    ValidationWarning,
)

logger = logging.getLogger(__name__)

_FAILED = "Configuration validation failed"


def _build_message(result: ValidationResult) -> str:
    if not result.has_errors:
        return _FAILED
    if len(result.errors) == 1:
        return f"{_FAILED}: {result.errors[0].message}"
    return f"{_FAILED} with {len(result.errors)} errors"


class ConfigurationException(RuntimeError):
    """Raised when a configuration is rejected.

    Args:
        source: The ValidationResult to wrap, a single ValidationError, or a
            plain message (wrapped as one GENERAL error). None is treated as
            an empty result.
    """

    def __init__(self, source: ValidationResult | ValidationError | str | None):
        if source is None:
            source = ValidationResult()
        if isinstance(source, ValidationResult):
            result = source
            message = _build_message(result)
        elif isinstance(source, ValidationError):
            result = ValidationResult.error(source)
            message = _build_message(result)
        else:
            message = str(source)
            result = ValidationResult.error(
                ValidationError(None, message, ValidationErrorType.GENERAL)
            )

        super().__init__(message)
        self.validation_result = result

    @property
    def errors(self) -> list[ValidationError]:
        return list(self.validation_result.errors)

    @property
    def warnings(self) -> list[ValidationWarning]:
        return list(self.validation_result.warnings)

    def has_recovery_suggestions(self) -> bool:
        """True if any error or warning carries a non-blank suggestion."""
        return any(error.has_suggestion for error in self.validation_result.errors) or \
            any(warning.has_suggestion for warning in self.validation_result.warnings)

    @property
    def recovery_suggestions(self) -> list[str]:
        return self.validation_result.recovery_suggestions

    def detailed_message(self) -> str:
        return self.validation_result.detailed_message(title=_FAILED)


class MissingRequiredPropertyException(ConfigurationException):
    """One or more required properties are absent or blank."""

    def __init__(self, missing_properties: str | Sequence[str]):
        if isinstance(missing_properties, str):
            missing_properties = [missing_properties]
        self.missing_properties = list(missing_properties)

        result = ValidationResult()
        for property_name in self.missing_properties:
            result.add_error(ValidationError.missing_required(property_name))
        super().__init__(result)


class InvalidPropertyValueException(ConfigurationException):
    """A property holds a value outside its accepted set or format."""

    def __init__(self, property_name: str, actual_value: Any,
                 expected_value: Any = None, message: str | None = None):
        self.property_name = property_name
        self.actual_value = actual_value
        self.expected_value = expected_value

        if message is not None:
            error = ValidationError(property_name, message, ValidationErrorType.INVALID_VALUE,
                                    actual_value=actual_value, expected_value=expected_value)
        else:
            error = ValidationError.invalid_value(property_name, actual_value, expected_value)
        super().__init__(error)


class PropertyOutOfRangeException(ConfigurationException):
    """A numeric property lies outside its inclusive bounds."""

    def __init__(self, property_name: str, actual_value: Any, min_value: Any, max_value: Any):
        self.property_name = property_name
        self.actual_value = actual_value
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(ValidationError.out_of_range(property_name, actual_value, min_value, max_value))


def require_valid(result: ValidationResult, fail_on_warnings: bool = False) -> ValidationResult:
    """Raise ConfigurationException unless ``result`` is acceptable.

    Warnings are logged and let through unless ``fail_on_warnings`` is set.

    Returns:
        The same result, for chaining.
    """
    if result.has_errors or (fail_on_warnings and result.has_warnings):
        raise ConfigurationException(result)

    for warning in result.warnings:
        logger.warning(f"Configuration accepted with warning: {warning.formatted_message}")

    return result
