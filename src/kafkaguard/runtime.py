"""Composition root: one validator and one lifecycle registry per application.

Create a KafkaGuardContext at startup and hand it (or its registry) to every
client factory; nothing in kafkaguard reaches for a global instance.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kafkaguard.config import KafkaGuardSettings
from kafkaguard.lifecycle import ClientKind, LifecycleRegistry, ManagedClientFactory
from kafkaguard.lifecycle.factory import ClientConstructor
from kafkaguard.validation import DefaultConfigurationValidator

logger = logging.getLogger(__name__)


@dataclass
class KafkaGuardContext:
    """Application-wide validator, registry and settings."""
    settings: KafkaGuardSettings
    validator: DefaultConfigurationValidator
    registry: LifecycleRegistry

    @classmethod
    def create(cls, settings: KafkaGuardSettings | None = None) -> "KafkaGuardContext":
        """Build a context from settings, installing the shutdown hook if configured."""
        settings = settings or KafkaGuardSettings()

        validator = DefaultConfigurationValidator(class_aliases=settings.validation.class_aliases)
        registry = LifecycleRegistry(phase_order=settings.lifecycle.phase_order)
        if settings.lifecycle.install_shutdown_hook:
            registry.install_shutdown_hook()

        logger.debug(f"Created context with phase order {[kind.value for kind in registry.phase_order]}")
        return cls(settings=settings, validator=validator, registry=registry)

    def factory(self, kind: ClientKind | str, constructor: ClientConstructor,
                defaults: Mapping[str, Any] | None = None) -> ManagedClientFactory:
        """Client factory bound to this context's validator and registry."""
        return ManagedClientFactory(
            kind,
            constructor,
            self.registry,
            validator=self.validator,
            defaults=defaults,
            fail_on_warnings=self.settings.validation.fail_on_warnings,
        )

    def shutdown(self) -> None:
        """Close every tracked client and drop the exit hook."""
        self.registry.remove_shutdown_hook()
        self.registry.close_all()
