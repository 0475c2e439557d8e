"""
Gestor Catalog Engine - Policies
==================================
Validation of product and supplier change-sets.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from core.commands.rejection import RejectionReason
from core.commands.validator import (
    changes_must_not_be_empty_policy,
    first_rejection,
    immutable_fields_policy,
    known_fields_policy,
)
from core.store.collection import EntityCollection


def catalog_update_policy(
    changes: Mapping[str, Any],
    collection: EntityCollection,
) -> Optional[RejectionReason]:
    """Products and suppliers share the same update rules."""
    return first_rejection(
        changes_must_not_be_empty_policy(changes),
        immutable_fields_policy(changes),
        known_fields_policy(changes, collection.field_names()),
    )
