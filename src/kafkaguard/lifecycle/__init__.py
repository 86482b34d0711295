"""Lifecycle management for Kafka client handles."""

from .factory import ManagedClientFactory, validate_for_kind
from .registry import (
    DEFAULT_PHASE_ORDER,
    ClientKind,
    Closeable,
    CloseFailure,
    LifecycleCloseError,
    LifecycleRegistry,
)

__all__ = [
    "ClientKind",
    "Closeable",
    "CloseFailure",
    "DEFAULT_PHASE_ORDER",
    "LifecycleCloseError",
    "LifecycleRegistry",
    "ManagedClientFactory",
    "validate_for_kind",
]
