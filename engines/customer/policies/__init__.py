"""
Gestor Customer Engine - Policies
===================================
Customer change-set rules.
"""

from typing import Any, Mapping, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.commands.validator import (
    changes_must_not_be_empty_policy,
    first_rejection,
    immutable_fields_policy,
    known_fields_policy,
)
from core.primitives.party import CUSTOMER_STATISTICS_FIELDS
from core.store.collection import EntityCollection


def statistics_are_derived_policy(
    changes: Mapping[str, Any],
) -> Optional[RejectionReason]:
    """total_orders / total_spent / last_order_date follow orders, never forms."""
    touched = sorted(CUSTOMER_STATISTICS_FIELDS.intersection(changes))
    if touched:
        return RejectionReason(
            code=ReasonCode.DERIVED_FIELD_READONLY,
            message=(
                f"Field(s) {', '.join(touched)} are calculated from orders "
                f"and cannot be edited."
            ),
            policy_name="statistics_are_derived_policy",
        )
    return None


def customer_update_policy(
    changes: Mapping[str, Any],
    collection: EntityCollection,
) -> Optional[RejectionReason]:
    return first_rejection(
        changes_must_not_be_empty_policy(changes),
        immutable_fields_policy(changes),
        statistics_are_derived_policy(changes),
        known_fields_policy(changes, collection.field_names()),
    )
