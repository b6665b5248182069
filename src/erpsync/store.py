r"""Id-mapping store between CRM entities and ERP records.

The synchronization flows persist, for every synchronized entity, the
id assigned by the ERP. This module defines the store capability they
rely on and an in-memory implementation.
"""

from __future__ import annotations

__all__ = ["IdMapping", "InMemoryMappingStore", "MappingKey", "MappingStore", "SyncStatus"]

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

logger: logging.Logger = logging.getLogger(__name__)

MappingKey = tuple[str, str]


class SyncStatus(Enum):
    """Synchronization status of a mapping."""

    SYNCED = "synced"
    PENDING = "pending"
    ERROR = "error"


@dataclass(frozen=True)
class IdMapping:
    """Mapping between a CRM entity and its ERP record.

    Args:
        entity_type: The entity type, e.g. ``"product"`` or
            ``"sales_document"``.
        local_id: The id of the entity in the CRM.
        remote_id: The id assigned by the ERP. It is ``None`` (or empty)
            until the first successful synchronization, and is required
            once the mapping is ``SYNCED``.
        remote_code: Optional code of the record in the ERP (e.g. the
            product code or the document number).
        sync_status: The synchronization status.
        sync_error: The last synchronization error, if any.
        last_synced_at: When the entity was last synchronized.
    """

    entity_type: str
    local_id: str
    remote_id: str | None = None
    remote_code: str | None = None
    sync_status: SyncStatus = SyncStatus.SYNCED
    sync_error: str | None = None
    last_synced_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @property
    def key(self) -> MappingKey:
        return (self.entity_type, self.local_id)


class MappingStore(Protocol):
    """Key-value capability storing id-mappings."""

    def get(self, key: MappingKey) -> IdMapping | None:
        """Return the mapping stored under ``key``, or ``None``."""

    def put(self, mapping: IdMapping) -> IdMapping:
        """Insert or replace a mapping and return the stored mapping."""

    def delete(self, key: MappingKey) -> bool:
        """Delete a mapping and indicate whether it existed."""


class InMemoryMappingStore:
    r"""Thread-safe in-memory implementation of ``MappingStore``.

    Example:
        ```pycon
        >>> from erpsync.store import IdMapping, InMemoryMappingStore
        >>> store = InMemoryMappingStore()
        >>> _ = store.put(IdMapping("product", "p-1", remote_id="mk-100"))
        >>> store.get(("product", "p-1")).remote_id
        'mk-100'
        >>> store.find_by_remote_id("product", "mk-100").local_id
        'p-1'
        >>> store.delete(("product", "p-1"))
        True
        >>> store.delete(("product", "p-1"))
        False

        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._mappings: dict[MappingKey, IdMapping] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._mappings)

    def get(self, key: MappingKey) -> IdMapping | None:
        with self._lock:
            return self._mappings.get(key)

    def put(self, mapping: IdMapping) -> IdMapping:
        if mapping.sync_status is SyncStatus.SYNCED and not mapping.remote_id:
            msg = f"remote_id must not be empty for synced mapping {mapping.key}"
            raise ValueError(msg)
        with self._lock:
            self._mappings[mapping.key] = mapping
        logger.debug(f"Stored mapping {mapping.key} -> {mapping.remote_id}")
        return mapping

    def delete(self, key: MappingKey) -> bool:
        with self._lock:
            return self._mappings.pop(key, None) is not None

    def find_by_remote_id(self, entity_type: str, remote_id: str) -> IdMapping | None:
        """Return the mapping of an ERP record, or ``None``.

        Args:
            entity_type: The entity type.
            remote_id: The id assigned by the ERP.

        Returns:
            The mapping, if any.
        """
        with self._lock:
            for mapping in self._mappings.values():
                if not mapping.remote_id:
                    continue
                if mapping.entity_type == entity_type and mapping.remote_id == remote_id:
                    return mapping
        return None

    def clear(self) -> None:
        with self._lock:
            self._mappings.clear()
