"""Lifecycle tracking for open Kafka client handles.

A LifecycleRegistry is created once by the application's composition root and
passed to every client factory. Factories register each handle right after
constructing it; at shutdown ``close_all`` closes every tracked handle, phase
by phase, without letting one failed close prevent the others.
"""

import atexit
import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class ClientKind(str, Enum):
    """Kinds of client handles, one tracked collection per kind."""
    PRODUCER = "producer"
    CONSUMER = "consumer"
    ADMIN = "admin"


DEFAULT_PHASE_ORDER = (ClientKind.PRODUCER, ClientKind.CONSUMER, ClientKind.ADMIN)


@runtime_checkable
class Closeable(Protocol):
    """Anything with a ``close()`` method."""

    def close(self) -> Any:
        ...


@dataclass
class CloseFailure:
    """A close attempt that raised during a ``close_all`` sweep."""
    kind: ClientKind
    handle: str                 # repr() of the handle
    error_type: str             # Exception class name
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "kind": self.kind.value,
            "handle": self.handle,
            "error_type": self.error_type,
            "message": self.message,
        }


class LifecycleCloseError(RuntimeError):
    """Raised once after a sweep in which at least one close failed.

    ``__cause__`` is the first failure; every failure of the sweep is listed in
    ``failures``.
    """

    def __init__(self, failures: list[CloseFailure]):
        super().__init__("Failed to close one or more Kafka clients")
        self.failures = failures


def normalize_phase_order(phase_order: Iterable[ClientKind | str] | None) -> tuple[ClientKind, ...]:
    """Validate a phase order: every kind exactly once.

    Raises:
        ValueError: If a kind is unknown, repeated or missing
    """
    if phase_order is None:
        return DEFAULT_PHASE_ORDER

    order = tuple(ClientKind(kind) for kind in phase_order)
    if len(order) != len(ClientKind) or set(order) != set(ClientKind):
        raise ValueError(
            f"phase order must list each of {[kind.value for kind in ClientKind]} exactly once, "
            f"got: {[kind.value for kind in order]}"
        )
    return order


class LifecycleRegistry:
    """Thread-safe registry of open producer, consumer and admin client handles.

    Each kind is tracked in its own list guarded by a single lock. Handles are
    compared by identity and tracked at most once.
    """

    def __init__(self, phase_order: Iterable[ClientKind | str] | None = None):
        self.phase_order = normalize_phase_order(phase_order)
        self._lock = threading.Lock()
        self._handles: dict[ClientKind, list[Any]] = {kind: [] for kind in ClientKind}
        self._hook_installed = False

    def register(self, kind: ClientKind | str, handle: Closeable | None) -> None:
        """Start tracking ``handle``; None is ignored."""
        if handle is None:
            return

        kind = ClientKind(kind)
        with self._lock:
            handles = self._handles[kind]
            if not any(tracked is handle for tracked in handles):
                handles.append(handle)

        logger.debug(f"Registered {kind.value} handle {handle!r}")

    def unregister(self, kind: ClientKind | str, handle: Closeable | None) -> None:
        """Stop tracking ``handle``; None or untracked handles are ignored."""
        if handle is None:
            return

        kind = ClientKind(kind)
        with self._lock:
            handles = self._handles[kind]
            for index, tracked in enumerate(handles):
                if tracked is handle:
                    del handles[index]
                    logger.debug(f"Unregistered {kind.value} handle {handle!r}")
                    break

    def register_producer(self, producer: Closeable | None) -> None:
        self.register(ClientKind.PRODUCER, producer)

    def register_consumer(self, consumer: Closeable | None) -> None:
        self.register(ClientKind.CONSUMER, consumer)

    def register_admin_client(self, admin_client: Closeable | None) -> None:
        self.register(ClientKind.ADMIN, admin_client)

    def unregister_producer(self, producer: Closeable | None) -> None:
        self.unregister(ClientKind.PRODUCER, producer)

    def unregister_consumer(self, consumer: Closeable | None) -> None:
        self.unregister(ClientKind.CONSUMER, consumer)

    def unregister_admin_client(self, admin_client: Closeable | None) -> None:
        self.unregister(ClientKind.ADMIN, admin_client)

    def tracked(self, kind: ClientKind | str) -> list[Any]:
        """Snapshot of the handles currently tracked for ``kind``."""
        with self._lock:
            return list(self._handles[ClientKind(kind)])

    def __len__(self) -> int:
        with self._lock:
            return sum(len(handles) for handles in self._handles.values())

    def close_all(self) -> None:
        """Close every tracked handle, phase by phase.

        Each phase takes the kind's handles out of the registry before closing
        them, so a handle is closed by at most one sweep and a handle
        registered meanwhile is left for the next sweep. Every handle is
        attempted even after earlier failures.

        Raises:
            LifecycleCloseError: If any close raised, after all phases ran
        """
        failures: list[CloseFailure] = []
        first_cause: Exception | None = None
        closed = 0

        for kind in self.phase_order:
            with self._lock:
                snapshot = self._handles[kind]
                self._handles[kind] = []

            for handle in snapshot:
                try:
                    handle.close()
                    closed += 1
                except Exception as e:
                    logger.warning(f"Failed to close {kind.value} handle {handle!r}: {e}")
                    failures.append(CloseFailure(
                        kind=kind,
                        handle=repr(handle),
                        error_type=type(e).__name__,
                        message=str(e),
                    ))
                    if first_cause is None:
                        first_cause = e

        logger.info(f"Closed {closed} Kafka client(s), {len(failures)} failure(s)")

        if failures:
            raise LifecycleCloseError(failures) from first_cause

    def install_shutdown_hook(self) -> None:
        """Run ``close_all`` at interpreter exit. Installing twice is a no-op."""
        with self._lock:
            if self._hook_installed:
                return
            self._hook_installed = True
        atexit.register(self._shutdown)

    def remove_shutdown_hook(self) -> None:
        with self._lock:
            if not self._hook_installed:
                return
            self._hook_installed = False
        atexit.unregister(self._shutdown)

    def _shutdown(self) -> None:
        try:
            self.close_all()
        except LifecycleCloseError as e:
            logger.error(f"{e}: {[failure.to_dict() for failure in e.failures]}")

    def __enter__(self) -> "LifecycleRegistry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close_all()
            return
        # keep the body's exception as the one that propagates
        try:
            self.close_all()
        except LifecycleCloseError as e:
            logger.error(f"{e}: {[failure.to_dict() for failure in e.failures]}")
