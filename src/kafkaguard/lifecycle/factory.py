"""Client factory that validates, constructs and registers Kafka clients."""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from ..validation import (
    ConfigurationValidator,
    DefaultConfigurationValidator,
    ValidationResult,
    require_valid,
)
from .registry import ClientKind, Closeable, LifecycleRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Closeable)

ClientConstructor = Callable[[dict[str, Any]], T]


def validate_for_kind(validator: ConfigurationValidator, kind: ClientKind | str,
                      properties: Mapping[str, Any] | None) -> ValidationResult:
    """Run the validation bundle matching ``kind``."""
    kind = ClientKind(kind)
    if kind is ClientKind.PRODUCER:
        return validator.validate_producer_properties(properties)
    if kind is ClientKind.CONSUMER:
        return validator.validate_consumer_properties(properties)
    return validator.validate_admin_client_properties(properties)


class ManagedClientFactory(Generic[T]):
    """Creates clients of one kind from a property map.

    ``create`` validates the merged properties with the role bundle, raises
    ConfigurationException on rejection, builds the client with
    ``constructor`` and registers it with the lifecycle registry before
    returning it.
    """

    def __init__(
        self,
        kind: ClientKind | str,
        constructor: ClientConstructor,
        registry: LifecycleRegistry,
        validator: ConfigurationValidator | None = None,
        defaults: Mapping[str, Any] | None = None,
        fail_on_warnings: bool = False,
    ):
        self.kind = ClientKind(kind)
        self.constructor = constructor
        self.registry = registry
        self.validator = validator or DefaultConfigurationValidator()
        self.defaults = dict(defaults or {})
        self.fail_on_warnings = fail_on_warnings

    def properties(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Defaults with ``overrides`` applied on top."""
        merged = dict(self.defaults)
        if overrides:
            merged.update(overrides)
        return merged

    def validate(self, overrides: Mapping[str, Any] | None = None) -> ValidationResult:
        return validate_for_kind(self.validator, self.kind, self.properties(overrides))

    def create(self, overrides: Mapping[str, Any] | None = None) -> T:
        """Validate, construct and register a client.

        Raises:
            ConfigurationException: If the merged properties are rejected
        """
        properties = self.properties(overrides)
        require_valid(
            validate_for_kind(self.validator, self.kind, properties),
            fail_on_warnings=self.fail_on_warnings,
        )

        client = self.constructor(properties)
        self.registry.register(self.kind, client)
        logger.debug(f"Created {self.kind.value} client {client!r}")
        return client

    def close(self, client: T) -> None:
        """Unregister and close a client created by this factory."""
        self.registry.unregister(self.kind, client)
        client.close()
