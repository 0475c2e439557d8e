"""
Gestor Order Engine - Service Layer
=====================================
Order lifecycle and its coupling to customer statistics.

create_order and delete_order each run the order write and the
customer statistics update in one store transaction: either both
land or neither does, and the mirror sees a single change per slot.
update_order and change_status never touch statistics.

Status is not free text: only the four OrderStatus values are
accepted, and a change must follow ORDER_STATUS_TRANSITIONS
(pending → in_production → completed, pending or in_production →
cancelled). Anything else comes back as a rejected outcome.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from core.commands.outcomes import CommandOutcome
from core.commands.rejection import validation_rejection
from core.primitives.order import Order
from core.store.service import CollectionService
from engines.customer.statistics import ORDER_ADDED, ORDER_REMOVED, apply_order_delta
from engines.order.commands import OrderCreateRequest
from engines.order.policies import order_total_matches_items_policy, order_update_policy


class OrderService(CollectionService):
    logger = logging.getLogger("gestor.orders")

    def create_order(self, payload: Mapping[str, Any]) -> CommandOutcome:
        try:
            request = OrderCreateRequest.from_payload(payload)
        except ValueError as exc:
            return self._reject(validation_rejection(exc, "create_order"))

        rejection = order_total_matches_items_policy(request)
        if rejection is not None:
            return self._reject(rejection)

        try:
            with self._store.transaction():
                order = self._store.orders.add(request.to_fields())
                apply_order_delta(self._store, order, ORDER_ADDED)
        except ValueError as exc:
            return self._reject(validation_rejection(exc, "create_order"))

        self.logger.info(
            f"Order '{order.id}' created for "
            f"{order.customer_id or 'guest'} (total {order.total})"
        )
        return self._accept(order)

    def update_order(self, order_id: str, changes: Mapping[str, Any]) -> CommandOutcome:
        orders = self._store.orders
        order = orders.get(order_id)
        if order is None:
            return self._not_found("Order", order_id, "update_order")
        return self._update(
            orders, order_id, changes,
            label="Order",
            policy=lambda c: order_update_policy(order, c, orders),
            policy_name="update_order",
        )

    def change_status(self, order_id: str, status: Any) -> CommandOutcome:
        return self.update_order(order_id, {"status": status})

    def delete_order(self, order_id: str) -> CommandOutcome:
        """
        Remove an order and take its stored total off the customer.

        Unknown ids are an accepted no-op (record None).
        """
        with self._store.transaction():
            removed = self._store.orders.delete(order_id)
            if removed is not None:
                apply_order_delta(self._store, removed, ORDER_REMOVED)
        if removed is not None:
            self.logger.info(f"Order '{order_id}' deleted (total {removed.total})")
        return self._accept(removed)

    def get_order(self, order_id: str) -> Optional[Order]:
        return self._store.orders.get(order_id)

    def list_orders(self) -> List[Order]:
        return self._store.orders.list()

    def orders_for_customer(self, customer_id: str) -> List[Order]:
        return [
            order for order in self._store.orders.list()
            if order.customer_id == customer_id
        ]
