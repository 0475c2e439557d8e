"""
Gestor Order Engine - Policies
================================
Order creation and update rules.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.commands.validator import (
    changes_must_not_be_empty_policy,
    first_rejection,
    immutable_fields_policy,
    known_fields_policy,
)
from core.primitives.fields import coerce_enum
from core.primitives.money import format_money, quantize_money
from core.primitives.order import Order, OrderStatus, is_allowed_transition
from core.store.collection import EntityCollection
from engines.order.commands import OrderCreateRequest


def order_total_matches_items_policy(
    request: OrderCreateRequest,
) -> Optional[RejectionReason]:
    """A supplied total must equal the item sum at cent precision."""
    if request.total is None:
        return None
    expected = quantize_money(request.items_total)
    if quantize_money(request.total) != expected:
        return RejectionReason(
            code=ReasonCode.ORDER_TOTAL_MISMATCH,
            message=(
                f"Order total {format_money(request.total)} does not match "
                f"the items ({format_money(expected)})."
            ),
            policy_name="order_total_matches_items_policy",
        )
    return None


def status_transition_policy(
    order: Order,
    changes: Mapping[str, Any],
) -> Optional[RejectionReason]:
    """
    pending → in_production → completed; pending or in_production →
    cancelled. completed and cancelled are final.
    """
    if "status" not in changes:
        return None
    try:
        target = coerce_enum(OrderStatus, changes["status"], "status")
    except ValueError as exc:
        return RejectionReason(
            code=ReasonCode.VALIDATION_FAILED,
            message=str(exc),
            policy_name="status_transition_policy",
        )
    if not is_allowed_transition(order.status, target):
        return RejectionReason(
            code=ReasonCode.ILLEGAL_STATUS_TRANSITION,
            message=(
                f"Order '{order.id}' cannot move from "
                f"{order.status.value} to {target.value}."
            ),
            policy_name="status_transition_policy",
        )
    return None


def order_update_policy(
    order: Order,
    changes: Mapping[str, Any],
    collection: EntityCollection,
) -> Optional[RejectionReason]:
    return first_rejection(
        changes_must_not_be_empty_policy(changes),
        immutable_fields_policy(changes),
        known_fields_policy(changes, collection.field_names()),
        status_transition_policy(order, changes),
    )
