"""Validator interface for Kafka client property maps.

Every operation takes a property map and returns a ValidationResult. A rule
reports what it finds instead of raising; callers that want fail-fast behavior
pass the result to ``require_valid``.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from .result import ValidationResult

PropertyMap = Mapping[str, Any]

# Custom rule: (property_name, value) -> ValidationResult
PropertyValidator = Callable[[str, Any], ValidationResult]


class ConfigurationValidator(ABC):
    """Base class for property-map validators."""

    @abstractmethod
    def validate(self, properties: PropertyMap | None) -> ValidationResult:
        """Validate the configuration as a whole."""
        pass

    @abstractmethod
    def validate_required_properties(self, properties: PropertyMap | None,
                                     *required_properties: str) -> ValidationResult:
        """Report every required property that is absent, None or blank."""
        pass

    @abstractmethod
    def validate_allowed_values(self, properties: PropertyMap | None, property_key: str,
                                *allowed_values: str) -> ValidationResult:
        """Check that the property's string form is one of ``allowed_values``."""
        pass

    @abstractmethod
    def validate_range(self, properties: PropertyMap | None, property_key: str,
                       min_value: int, max_value: int) -> ValidationResult:
        """Check that a numeric property lies in ``[min_value, max_value]``."""
        pass

    @abstractmethod
    def validate_class(self, properties: PropertyMap | None, property_key: str,
                       expected_type: type) -> ValidationResult:
        """Check that the property names a loadable class providing ``expected_type``."""
        pass

    @abstractmethod
    def validate_custom(self, properties: PropertyMap | None, property_key: str,
                        validator: PropertyValidator | None) -> ValidationResult:
        """Delegate to a caller-supplied rule."""
        pass

    @abstractmethod
    def check_for_warnings(self, properties: PropertyMap | None) -> ValidationResult:
        """Report valid settings that are risky for performance or reliability."""
        pass

    @abstractmethod
    def validate_producer_properties(self, properties: PropertyMap | None) -> ValidationResult:
        pass

    @abstractmethod
    def validate_consumer_properties(self, properties: PropertyMap | None) -> ValidationResult:
        pass

    @abstractmethod
    def validate_admin_client_properties(self, properties: PropertyMap | None) -> ValidationResult:
        pass
