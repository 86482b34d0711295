"""Tests for configuration exceptions and the fail-fast adapter."""

import logging

import pytest

from kafkaguard.validation import (
    ConfigurationException,
    DefaultConfigurationValidator,
    InvalidPropertyValueException,
    MissingRequiredPropertyException,
    PropertyOutOfRangeException,
    require_valid,
)
from kafkaguard.validation.result import (
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    ValidationWarning,
)


class TestConfigurationException:

    def test_single_error_message(self):
        exc = ConfigurationException(ValidationResult.error(ValidationError.missing_required("group.id")))

        assert str(exc) == "Configuration validation failed: Required property is missing"
        assert len(exc.errors) == 1

    def test_multiple_errors_message(self):
        result = ValidationResult()
        result.add_error(ValidationError.missing_required("group.id"))
        result.add_error(ValidationError.missing_required("bootstrap.servers"))

        exc = ConfigurationException(result)

        assert str(exc) == "Configuration validation failed with 2 errors"

    def test_no_errors_message(self):
        exc = ConfigurationException(ValidationResult.warning(ValidationWarning("a", "b")))
        assert str(exc) == "Configuration validation failed"

    def test_none_is_empty_result(self):
        exc = ConfigurationException(None)

        assert str(exc) == "Configuration validation failed"
        assert exc.errors == []
        assert exc.validation_result.is_valid

    def test_from_single_error(self):
        error = ValidationError("acks", "bad acks", ValidationErrorType.INVALID_VALUE)
        exc = ConfigurationException(error)

        assert exc.errors == [error]
        assert exc.validation_result.errors == [error]

    def test_from_message(self):
        exc = ConfigurationException("something broke")

        assert str(exc) == "something broke"
        assert exc.errors[0].type == ValidationErrorType.GENERAL
        assert exc.errors[0].property_name is None

    def test_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            raise ConfigurationException("boom")

    def test_recovery_suggestions(self):
        result = ValidationResult()
        result.add_error(ValidationError("a", "m"))
        assert not ConfigurationException(result).has_recovery_suggestions()

        result.add_warning(ValidationWarning("b", "m", suggestion="Do this"))
        exc = ConfigurationException(result)
        assert exc.has_recovery_suggestions()
        assert exc.recovery_suggestions == ["Do this"]

    def test_detailed_message(self):
        result = ValidationResult()
        result.add_error(ValidationError.missing_required("group.id"))
        result.add_warning(ValidationWarning.performance("bootstrap.servers", "Only one", "Add more"))

        message = ConfigurationException(result).detailed_message()

        assert message.startswith("Configuration validation failed\n\nErrors:")
        assert "1. [group.id] Required property is missing" in message
        assert "Warnings:\n  1. [bootstrap.servers] Only one Suggestion: Add more" in message
        assert "Suggestions:" in message

    def test_warnings_exposed(self):
        warning = ValidationWarning("p", "m")
        result = ValidationResult(errors=[ValidationError("a", "m")], warnings=[warning])
        assert ConfigurationException(result).warnings == [warning]


class TestNamedExceptions:

    def test_missing_required_single(self):
        exc = MissingRequiredPropertyException("group.id")

        assert exc.missing_properties == ["group.id"]
        assert exc.errors == [ValidationError.missing_required("group.id")]
        assert isinstance(exc, ConfigurationException)

    def test_missing_required_many(self):
        exc = MissingRequiredPropertyException(["group.id", "bootstrap.servers"])

        assert len(exc.errors) == 2
        assert str(exc) == "Configuration validation failed with 2 errors"

    def test_invalid_property_value(self):
        exc = InvalidPropertyValueException("acks", "2", "one of: 0, 1, all")

        assert exc.property_name == "acks"
        assert exc.actual_value == "2"
        assert exc.expected_value == "one of: 0, 1, all"
        assert exc.errors[0].type == ValidationErrorType.INVALID_VALUE
        assert str(exc) == "Configuration validation failed: Invalid value: 2"

    def test_invalid_property_value_with_message(self):
        exc = InvalidPropertyValueException("acks", "2", message="acks must be 0, 1 or all")

        assert exc.expected_value is None
        assert exc.errors[0].message == "acks must be 0, 1 or all"

    def test_property_out_of_range(self):
        exc = PropertyOutOfRangeException("linger.ms", 70000, 0, 60000)

        assert exc.property_name == "linger.ms"
        assert exc.min_value == 0
        assert exc.max_value == 60000
        assert exc.errors[0].type == ValidationErrorType.OUT_OF_RANGE

    def test_catch_by_kind(self):
        with pytest.raises(MissingRequiredPropertyException) as exc_info:
            raise MissingRequiredPropertyException("group.id")
        assert exc_info.value.missing_properties == ["group.id"]


class TestRequireValid:

    def test_valid_result_returned(self):
        result = ValidationResult.success()
        assert require_valid(result) is result

    def test_invalid_result_raises_with_every_error(self):
        result = DefaultConfigurationValidator().validate_consumer_properties({})

        with pytest.raises(ConfigurationException) as exc_info:
            require_valid(result)

        assert exc_info.value.validation_result is result
        assert len(exc_info.value.errors) == 4

    def test_warnings_logged_not_raised(self, caplog):
        result = ValidationResult.warning(ValidationWarning.performance("bootstrap.servers", "Only one", "Add"))

        with caplog.at_level(logging.WARNING, logger="kafkaguard"):
            require_valid(result)

        assert "Only one" in caplog.text

    def test_fail_on_warnings(self):
        result = ValidationResult.warning(ValidationWarning("a", "b"))

        with pytest.raises(ConfigurationException):
            require_valid(result, fail_on_warnings=True)
