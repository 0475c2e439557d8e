"""
Gestor Customer Engine - Statistics Maintainer
================================================
Keeps a customer's order count, total spent and last-order date in
step with the order collection.

Called from exactly two places, each inside the same store
transaction as the order write:
    order created → sign = +1
    order deleted → sign = -1
Order updates (status, notes, even total) never call it.

Rules:
- total_spent  += sign × order.total (the stored total, not items)
- total_orders += sign, never below zero
- last_order_date = now on +1; left as-is on -1, so deleting the
  latest order does not roll it back to the previous order's date
- unknown or missing customer_id (guest order): no-op, no error
"""

from __future__ import annotations

import logging
from typing import Optional

from core.primitives.order import Order
from core.primitives.party import Customer
from core.store.store import EntityStore
from core.time.clock import Clock

logger = logging.getLogger("gestor.customers")

ORDER_ADDED = 1
ORDER_REMOVED = -1


def apply_order_delta(
    store: EntityStore,
    order: Order,
    sign: int,
    *,
    clock: Optional[Clock] = None,
) -> Optional[Customer]:
    """
    Apply one order's contribution to its customer's statistics.

    Returns the updated customer, or None for guest orders.

    Raises:
        ValueError: sign is not +1 or -1.
    """
    if sign not in (ORDER_ADDED, ORDER_REMOVED):
        raise ValueError(f"sign must be +1 or -1, got {sign!r}.")
    if not order.customer_id:
        return None

    with store.transaction():
        customer = store.customers.get(order.customer_id)
        if customer is None:
            logger.debug(
                f"Order '{order.id}' references unknown customer "
                f"'{order.customer_id}', statistics skipped"
            )
            return None

        total_orders = customer.total_orders + sign
        if total_orders < 0:
            logger.warning(
                f"Customer '{customer.id}' order count would drop below zero "
                f"after removing order '{order.id}', keeping 0"
            )
            total_orders = 0

        changes = {
            "total_orders": total_orders,
            "total_spent": customer.total_spent + sign * order.total,
        }
        if sign == ORDER_ADDED:
            changes["last_order_date"] = (clock or store.clock).now_utc()

        updated = store.customers.update(customer.id, changes)
    return updated
