"""Validation rules for Kafka client property maps.

Each rule inspects one property map and returns a ValidationResult. Rules do
not mutate the map and do not stop at the first failure. The role bundles
(producer, consumer, admin client) only compose the generic rules with fixed
parameters and merge the sub-results in a fixed order.
"""

import importlib
import logging
import re
from collections.abc import Mapping
from numbers import Number
from typing import Any

from ..serialization import KNOWN_ALIASES
from .framework import ConfigurationValidator, PropertyMap, PropertyValidator
from .result import (
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    ValidationWarning,
)

logger = logging.getLogger(__name__)

INT_MAX = 2**31 - 1
LONG_MAX = 2**63 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")

BOOTSTRAP_SERVERS = "bootstrap.servers"

PRODUCER_REQUIRED = ("bootstrap.servers", "key.serializer", "value.serializer")
CONSUMER_REQUIRED = ("bootstrap.servers", "group.id", "key.deserializer", "value.deserializer")
ADMIN_REQUIRED = ("bootstrap.servers",)

ACKS_VALUES = ("0", "1", "all", "-1")
COMPRESSION_TYPES = ("none", "gzip", "snappy", "lz4", "zstd")
OFFSET_RESET_VALUES = ("earliest", "latest", "none")


def as_text(value: Any) -> str:
    """String form of a property value as it would appear in a properties file."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(as_text(item) for item in value)
    return str(value)


def _null_properties() -> ValidationResult:
    return ValidationResult.error(
        ValidationError(None, "Configuration properties cannot be null", ValidationErrorType.GENERAL)
    )


def _present(properties: PropertyMap | None, property_key: str) -> bool:
    """True when the key is set to a non-None value."""
    return properties is not None and properties.get(property_key) is not None


class DefaultConfigurationValidator(ConfigurationValidator):
    """Validator for producer, consumer and admin client property maps."""

    def __init__(self, class_aliases: Mapping[str, str] | None = None):
        """
        Args:
            class_aliases: Extra class name aliases for ``validate_class``,
                mapping a tag (e.g. a JVM class name) to a Python import path.
        """
        self.class_aliases: dict[str, str] = dict(KNOWN_ALIASES)
        if class_aliases:
            self.class_aliases.update(class_aliases)

    def validate(self, properties: PropertyMap | None) -> ValidationResult:
        if properties is None:
            return _null_properties()

        result = ValidationResult()
        result.merge(self.validate_required_properties(properties, BOOTSTRAP_SERVERS))
        result.merge(self.check_for_warnings(properties))
        return result

    def validate_required_properties(self, properties: PropertyMap | None,
                                     *required_properties: str) -> ValidationResult:
        if properties is None:
            return _null_properties()

        result = ValidationResult()
        for required_property in required_properties:
            value = properties.get(required_property)
            if value is None or (isinstance(value, str) and not value.strip()):
                result.add_error(ValidationError.missing_required(required_property))

        return result

    def validate_allowed_values(self, properties: PropertyMap | None, property_key: str,
                                *allowed_values: str) -> ValidationResult:
        result = ValidationResult()
        if not _present(properties, property_key):
            return result

        text = as_text(properties[property_key])
        if text not in allowed_values:
            result.add_error(ValidationError.invalid_value(
                property_key,
                text,
                f"one of: {', '.join(allowed_values)}"
            ))

        return result

    def validate_range(self, properties: PropertyMap | None, property_key: str,
                       min_value: int, max_value: int) -> ValidationResult:
        result = ValidationResult()
        if not _present(properties, property_key):
            return result

        value = properties[property_key]
        number = self._to_integer(value)
        if number is None:
            result.add_error(ValidationError(
                property_key,
                f"Invalid numeric value: {as_text(value)}",
                ValidationErrorType.INVALID_FORMAT,
                "Value must be a valid number",
                actual_value=value,
            ))
            return result

        if number < min_value or number > max_value:
            result.add_error(ValidationError.out_of_range(property_key, number, min_value, max_value))

        return result

    def validate_class(self, properties: PropertyMap | None, property_key: str,
                       expected_type: type) -> ValidationResult:
        result = ValidationResult()
        if not _present(properties, property_key):
            return result

        value = properties[property_key]
        expected_name = _qualified_name(expected_type)

        if isinstance(value, type):
            cls = value
            class_name = _qualified_name(value)
        else:
            class_name = as_text(value).strip()
            try:
                cls = self.load_class(class_name)
            except (ImportError, AttributeError, ValueError) as e:
                logger.debug(f"Could not load {class_name} for {property_key}: {e}")
                result.add_error(ValidationError(
                    property_key,
                    f"Class not found: {class_name}",
                    ValidationErrorType.INVALID_CLASS,
                    "Ensure the class is importable from the current environment",
                    actual_value=class_name,
                    expected_value=expected_name,
                ))
                return result

        if not isinstance(cls, type) or not issubclass(cls, expected_type):
            result.add_error(ValidationError(
                property_key,
                f"Class {class_name} does not implement or extend {expected_name}",
                ValidationErrorType.INVALID_CLASS,
                "Ensure the class implements the required interface or extends the required class",
                actual_value=class_name,
                expected_value=expected_name,
            ))

        return result

    def validate_custom(self, properties: PropertyMap | None, property_key: str,
                        validator: PropertyValidator | None) -> ValidationResult:
        if properties is None or property_key not in properties or validator is None:
            return ValidationResult.success()

        return validator(property_key, properties[property_key])

    def check_for_warnings(self, properties: PropertyMap | None) -> ValidationResult:
        result = ValidationResult()
        if properties is None:
            return result

        self._check_bootstrap_servers(properties, result)
        result.merge(self._check_producer_warnings(properties))
        result.merge(self._check_consumer_warnings(properties))

        return result

    def validate_producer_properties(self, properties: PropertyMap | None) -> ValidationResult:
        if properties is None:
            return _null_properties()

        result = ValidationResult()
        result.merge(self.validate_required_properties(properties, *PRODUCER_REQUIRED))
        result.merge(self.validate_allowed_values(properties, "acks", *ACKS_VALUES))
        result.merge(self.validate_allowed_values(properties, "compression.type", *COMPRESSION_TYPES))
        result.merge(self.validate_range(properties, "retries", 0, INT_MAX))
        result.merge(self.validate_range(properties, "batch.size", 0, INT_MAX))
        result.merge(self.validate_range(properties, "linger.ms", 0, LONG_MAX))
        result.merge(self.validate_range(properties, "buffer.memory", 0, LONG_MAX))
        result.merge(self._check_producer_warnings(properties))

        logger.debug(f"Producer properties validated: {result}")
        return result

    def validate_consumer_properties(self, properties: PropertyMap | None) -> ValidationResult:
        if properties is None:
            return _null_properties()

        result = ValidationResult()
        result.merge(self.validate_required_properties(properties, *CONSUMER_REQUIRED))
        result.merge(self.validate_allowed_values(properties, "auto.offset.reset", *OFFSET_RESET_VALUES))
        result.merge(self.validate_range(properties, "session.timeout.ms", 1, 3_600_000))
        result.merge(self.validate_range(properties, "max.poll.records", 1, INT_MAX))
        result.merge(self.validate_range(properties, "fetch.min.bytes", 1, INT_MAX))
        result.merge(self.validate_range(properties, "fetch.max.wait.ms", 0, INT_MAX))
        result.merge(self._check_consumer_warnings(properties))

        logger.debug(f"Consumer properties validated: {result}")
        return result

    def validate_admin_client_properties(self, properties: PropertyMap | None) -> ValidationResult:
        if properties is None:
            return _null_properties()

        result = ValidationResult()
        result.merge(self.validate_required_properties(properties, *ADMIN_REQUIRED))
        result.merge(self.validate_range(properties, "request.timeout.ms", 1000, 300_000))
        result.merge(self.validate_range(properties, "retries", 0, INT_MAX))

        logger.debug(f"Admin client properties validated: {result}")
        return result

    def load_class(self, class_name: str) -> Any:
        """Resolve ``pkg.module.Name`` or ``pkg.module:Name`` to the named object.

        Raises:
            ImportError: If the module cannot be imported
            AttributeError: If the module has no such attribute
            ValueError: If the name has no module part
        """
        target = self.class_aliases.get(class_name, class_name)

        if ":" in target:
            module_name, _, attribute_path = target.partition(":")
        else:
            module_name, _, attribute_path = target.rpartition(".")

        if not module_name or not attribute_path:
            raise ValueError(f"Not a qualified class name: {class_name}")

        obj: Any = importlib.import_module(module_name)
        for attribute in attribute_path.split("."):
            obj = getattr(obj, attribute)
        return obj

    @staticmethod
    def _to_integer(value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, Number):
            try:
                return int(value)
            except (TypeError, ValueError, OverflowError):
                return None
        text = as_text(value)
        if not _INTEGER_PATTERN.fullmatch(text):
            return None
        try:
            return int(text)
        except ValueError:
            # digit count above the interpreter's int conversion limit
            return None

    def _check_bootstrap_servers(self, properties: PropertyMap, result: ValidationResult) -> None:
        if not _present(properties, BOOTSTRAP_SERVERS):
            return

        if "," not in as_text(properties[BOOTSTRAP_SERVERS]):
            result.add_warning(ValidationWarning.performance(
                BOOTSTRAP_SERVERS,
                "Only one bootstrap server is configured",
                "Configure multiple bootstrap servers for better reliability: 'host1:9092,host2:9092'"
            ))

    def _check_producer_warnings(self, properties: PropertyMap) -> ValidationResult:
        result = ValidationResult()

        if _present(properties, "acks") and as_text(properties["acks"]) == "0":
            result.add_warning(ValidationWarning.reliability(
                "acks",
                "acks=0 provides no guarantee that records have been received by the broker",
                "Consider using acks=1 or acks=all for better durability guarantees"
            ))

        retries = properties.get("retries")
        if retries is not None and not isinstance(retries, bool) and as_text(retries).strip() == "0":
            result.add_warning(ValidationWarning.reliability(
                "retries",
                "retries=0 means no retries will be performed",
                "Consider setting retries to a positive value to handle transient errors"
            ))

        return result

    def _check_consumer_warnings(self, properties: PropertyMap) -> ValidationResult:
        result = ValidationResult()

        auto_commit = properties.get("enable.auto.commit")
        if auto_commit is not None and as_text(auto_commit).strip().lower() == "true":
            result.add_warning(ValidationWarning.reliability(
                "enable.auto.commit",
                "enable.auto.commit=true may result in duplicate processing or message loss",
                "Consider using manual commit (enable.auto.commit=false) for better control"
            ))

        if _present(properties, "auto.offset.reset") and as_text(properties["auto.offset.reset"]) == "latest":
            result.add_warning(ValidationWarning.performance(
                "auto.offset.reset",
                "auto.offset.reset=latest will cause the consumer to miss messages sent while offline",
                "Consider using 'earliest' if you need to process all messages"
            ))

        return result


def _qualified_name(cls: Any) -> str:
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None) or str(cls)
    if module and module != "builtins":
        return f"{module}.{name}"
    return name
