"""
Gestor Entity Store - Record Collection
=========================================
Generic CRUD over one kind of frozen record, kept in insertion
order and keyed by id.

The collection owns id generation and creation timestamps: callers
hand it field values, never an id.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, TypeVar

from core.primitives.ids import IdGenerator
from core.time.clock import Clock

T = TypeVar("T")


class EntityCollection(Generic[T]):
    """
    Ordered id → record mapping.

    ``on_change`` is invoked after every mutation with the slot name
    so the owning store can mark it dirty.
    """

    def __init__(
        self,
        slot: str,
        record_type: type,
        *,
        id_generator: IdGenerator,
        clock: Clock,
        on_change: Callable[[str], None],
    ) -> None:
        self.slot = slot
        self._record_type = record_type
        self._id_generator = id_generator
        self._clock = clock
        self._on_change = on_change
        self._records: Dict[str, T] = {}

    # ── reads ─────────────────────────────────────────────────

    def get(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def list(self) -> List[T]:
        return list(self._records.values())

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    @property
    def count(self) -> int:
        return len(self._records)

    # ── writes ────────────────────────────────────────────────

    def add(self, fields: Mapping[str, Any]) -> T:
        """
        Create a record with a generated id and ``created_at``.

        Raises:
            ValueError: the record rejects the field values.
        """
        data = dict(fields)
        data.pop("id", None)
        data.pop("created_at", None)
        record_id = self._id_generator.new_id()
        if record_id in self._records:
            raise RuntimeError(f"Id generator produced duplicate id '{record_id}'.")
        data["id"] = record_id
        data["created_at"] = self._clock.now_utc()
        record = self._record_type.from_dict(data)
        self._records[record_id] = record
        self._on_change(self.slot)
        return record

    def update(self, record_id: str, changes: Mapping[str, Any]) -> Optional[T]:
        """
        Shallow merge ``changes`` into the stored record.

        Fields not named in ``changes`` are preserved. Returns None
        when the id is unknown.

        Raises:
            ValueError: the merged record fails validation.
        """
        current = self._records.get(record_id)
        if current is None:
            return None
        updated = dataclasses.replace(current, **dict(changes))
        self._records[record_id] = updated
        self._on_change(self.slot)
        return updated

    def delete(self, record_id: str) -> Optional[T]:
        """Remove and return the record; None (and no change) if absent."""
        removed = self._records.pop(record_id, None)
        if removed is not None:
            self._on_change(self.slot)
        return removed

    def replace_all(self, records: Iterable[T]) -> None:
        """Swap the whole content, keeping the given order (load path)."""
        self._records = {record.id: record for record in records}
        self._on_change(self.slot)

    # ── snapshots ─────────────────────────────────────────────

    def snapshot(self) -> Dict[str, T]:
        return dict(self._records)

    def restore(self, snapshot: Dict[str, T]) -> None:
        self._records = dict(snapshot)

    def to_payload(self) -> List[dict]:
        return [record.to_dict() for record in self._records.values()]

    @property
    def record_type(self) -> type:
        return self._record_type

    def field_names(self) -> frozenset:
        return frozenset(f.name for f in dataclasses.fields(self._record_type))
