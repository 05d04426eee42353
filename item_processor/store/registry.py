"""Registry of record store backends selectable via STORE_BACKEND."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from item_processor.config import get_settings
from item_processor.store.abstract import AbstractRecordStore
from item_processor.store.memory import InMemoryRecordStore
from item_processor.store.postgres import PostgresRecordStore


def _store_factories() -> Dict[str, Callable[[], AbstractRecordStore]]:
    """Registry of available backends."""
    return {
        "memory": lambda: InMemoryRecordStore(
            latency_seconds=get_settings().store_latency_ms / 1000.0
        ),
        "postgres": lambda: PostgresRecordStore(),
    }


def available_backends() -> List[str]:
    """List available backend names."""
    return sorted(_store_factories().keys())


def resolve_store(name: Optional[str] = None) -> AbstractRecordStore:
    """Build the named backend, defaulting to settings.store_backend."""
    backend = name or get_settings().store_backend
    factories = _store_factories()
    if backend not in factories:
        raise ValueError(f"Unknown store backend '{backend}'. Available: {', '.join(factories)}")
    return factories[backend]()


__all__ = ["available_backends", "resolve_store"]
