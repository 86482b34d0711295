"""kafkaguard - Configuration validation and client lifecycle tracking for Kafka.

kafkaguard checks producer, consumer and admin client property maps before a
client is built, reporting every violated rule at once, and tracks the open
client handles so they can all be closed at shutdown.
"""

__version__ = "0.1.0"
__description__ = "Configuration validation and client lifecycle tracking for Kafka clients"

from kafkaguard.lifecycle import ClientKind, LifecycleCloseError, LifecycleRegistry, ManagedClientFactory
from kafkaguard.validation import (
    ConfigurationException,
    DefaultConfigurationValidator,
    ValidationResult,
    require_valid,
)
from kafkaguard.config import KafkaGuardSettings, load_settings
from kafkaguard.runtime import KafkaGuardContext

__all__ = [
    "__version__",
    "__description__",
    "ClientKind",
    "ConfigurationException",
    "DefaultConfigurationValidator",
    "KafkaGuardContext",
    "KafkaGuardSettings",
    "LifecycleCloseError",
    "LifecycleRegistry",
    "ManagedClientFactory",
    "ValidationResult",
    "load_settings",
    "require_valid",
]
