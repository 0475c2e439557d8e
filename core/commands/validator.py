"""
Gestor Command Layer - Change-Set Policies
============================================
Policies shared by every "update record" operation.

Each policy returns None when the change-set is acceptable, or a
RejectionReason explaining why not. Policies never mutate.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from core.commands.rejection import ReasonCode, RejectionReason

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def changes_must_not_be_empty_policy(
    changes: Mapping[str, Any],
) -> Optional[RejectionReason]:
    if not changes:
        return RejectionReason(
            code=ReasonCode.VALIDATION_FAILED,
            message="Nothing to update.",
            policy_name="changes_must_not_be_empty_policy",
        )
    return None


def immutable_fields_policy(
    changes: Mapping[str, Any],
) -> Optional[RejectionReason]:
    touched = sorted(IMMUTABLE_FIELDS.intersection(changes))
    if touched:
        return RejectionReason(
            code=ReasonCode.IMMUTABLE_FIELD,
            message=f"Field(s) cannot be changed: {', '.join(touched)}.",
            policy_name="immutable_fields_policy",
        )
    return None


def known_fields_policy(
    changes: Mapping[str, Any],
    allowed: Iterable[str],
) -> Optional[RejectionReason]:
    unknown = sorted(set(changes) - set(allowed))
    if unknown:
        return RejectionReason(
            code=ReasonCode.UNKNOWN_FIELD,
            message=f"Unknown field(s): {', '.join(unknown)}.",
            policy_name="known_fields_policy",
        )
    return None


def first_rejection(*results: Optional[RejectionReason]) -> Optional[RejectionReason]:
    for result in results:
        if result is not None:
            return result
    return None
