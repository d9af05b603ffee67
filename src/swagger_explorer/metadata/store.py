"""Metadata store and model registry.

Both live on an explicit SwaggerRegistry that is created at startup,
filled during the declaration phase and read by the explorer. Nothing
here is a module-level global.
"""

import logging
import threading
from typing import Any

from swagger_explorer.errors import RegistryFrozenError

from .base import ModelMeta, OperationMeta
from .merge import merge_records

logger = logging.getLogger(__name__)


class MetadataStore:
    """Records keyed by (target, member, record type).

    The record type keeps operation metadata and model metadata recorded
    on the same class apart.
    """

    def __init__(self):
        self._records: dict[tuple[Any, str | None, type], Any] = {}

    def get(self, target, member: str | None = None, record_type: type = OperationMeta):
        return self._records.get((target, member, record_type))

    def set(self, target, record, member: str | None = None) -> None:
        self._records[(target, member, type(record))] = record

    def update(self, target, fragment, member: str | None = None):
        """Merge `fragment` into the record for its key and return the result."""
        key = (target, member, type(fragment))
        merged = merge_records(self._records.get(key), fragment)
        self._records[key] = merged
        return merged

    def __len__(self) -> int:
        return len(self._records)


class ModelRegistry:
    """Named model declarations available for schema resolution."""

    def __init__(self):
        self._models: dict[str, Any] = {}

    def register(self, name: str, handle) -> None:
        existing = self._models.get(name)
        if existing is not None and existing is not handle:
            logger.warning("Model name %r re-registered by %r, replacing %r", name, handle, existing)
        self._models[name] = handle

    def get(self, name: str):
        return self._models.get(name)

    def all(self) -> list[tuple[str, Any]]:
        return list(self._models.items())

    def __contains__(self, name: str) -> bool:
        return name in self._models


class SwaggerRegistry:
    """The metadata store plus model registry, guarded by one lock.

    Writers (annotations) and readers (explore passes) both hold `lock`,
    so an explore running during a late registration never sees a
    half-applied annotation. `freeze()` ends the declaration phase.
    """

    def __init__(self):
        self.store = MetadataStore()
        self.models = ModelRegistry()
        self.lock = threading.RLock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        with self.lock:
            self._frozen = True

    def annotate(self, target, fragment, member: str | None = None):
        """Record one annotation fragment against `target`."""
        with self.lock:
            self._check_writable(target)
            return self.store.update(target, fragment, member)

    def register_model(self, model, name: str | None = None) -> str:
        name = name or model.__name__
        with self.lock:
            self._check_writable(model)
            self.models.register(name, model)
        return name

    def model_meta(self, name: str) -> ModelMeta | None:
        handle = self.models.get(name)
        if handle is None:
            return None
        return self.store.get(handle, record_type=ModelMeta) or ModelMeta()

    def _check_writable(self, target) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot annotate {target!r}: registry is frozen")
