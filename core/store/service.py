"""
Gestor Entity Store - Service Base
====================================
Shared create / update / delete plumbing for engine services.

Validation failures come back as REJECTED outcomes and the store is
left exactly as it was. Deleting an unknown id is an ACCEPTED no-op
whose record is None.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from core.commands.outcomes import CommandOutcome
from core.commands.rejection import ReasonCode, RejectionReason, validation_rejection
from core.store.collection import EntityCollection
from core.store.store import EntityStore


class CollectionService:
    """Base for engine services that write to one or more collections."""

    logger = logging.getLogger("gestor.store")

    def __init__(self, *, store: EntityStore):
        self._store = store

    @property
    def store(self) -> EntityStore:
        return self._store

    def _now(self):
        return self._store.clock.now_utc()

    def _accept(self, record: Any) -> CommandOutcome:
        return CommandOutcome.accepted(record, occurred_at=self._now())

    def _reject(self, reason: RejectionReason) -> CommandOutcome:
        self.logger.info(f"Mutation REJECTED [{reason.code}] by {reason.policy_name}: {reason.message}")
        return CommandOutcome.rejected(reason, occurred_at=self._now())

    def _not_found(self, label: str, record_id: str, policy_name: str) -> CommandOutcome:
        return self._reject(RejectionReason(
            code=ReasonCode.RECORD_NOT_FOUND,
            message=f"{label} '{record_id}' not found.",
            policy_name=policy_name,
        ))

    def _create(
        self,
        collection: EntityCollection,
        build_request: Callable[[], Any],
        policy_name: str,
    ) -> CommandOutcome:
        try:
            request = build_request()
            with self._store.transaction():
                record = collection.add(request.to_fields())
        except ValueError as exc:
            return self._reject(validation_rejection(exc, policy_name))
        self.logger.info(f"{collection.slot}: created '{record.id}'")
        return self._accept(record)

    def _update(
        self,
        collection: EntityCollection,
        record_id: str,
        changes: Mapping[str, Any],
        *,
        label: str,
        policy: Callable[[Mapping[str, Any]], Optional[RejectionReason]],
        policy_name: str,
    ) -> CommandOutcome:
        if record_id not in collection:
            return self._not_found(label, record_id, policy_name)
        changes = dict(changes)
        rejection = policy(changes)
        if rejection is not None:
            return self._reject(rejection)
        try:
            with self._store.transaction():
                record = collection.update(record_id, changes)
        except ValueError as exc:
            return self._reject(validation_rejection(exc, policy_name))
        self.logger.info(f"{collection.slot}: updated '{record_id}' ({', '.join(sorted(changes))})")
        return self._accept(record)

    def _delete(self, collection: EntityCollection, record_id: str) -> CommandOutcome:
        removed = collection.delete(record_id)
        if removed is not None:
            self.logger.info(f"{collection.slot}: deleted '{record_id}'")
        return self._accept(removed)


def text_matches(term: Optional[str], *values: Optional[str]) -> bool:
    """Case-insensitive substring search; an empty term matches everything."""
    if not term or not term.strip():
        return True
    needle = term.strip().lower()
    return any(value and needle in value.lower() for value in values)


def is_any_filter(value: Any) -> bool:
    return value is None or value == "" or value == "all"
