"""
Gestor Customer Engine - Service Layer
========================================
Customer profiles: create, update, delete, list, search.

Deleting a customer never deletes orders. Their customer_id is a
weak reference and simply stops resolving.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from core.commands.outcomes import CommandOutcome
from core.primitives.fields import coerce_enum
from core.primitives.party import Customer, CustomerType
from core.store.service import CollectionService, is_any_filter, text_matches
from engines.customer.commands import CustomerCreateRequest
from engines.customer.policies import customer_update_policy


class CustomerService(CollectionService):
    logger = logging.getLogger("gestor.customers")

    def add_customer(self, payload: Mapping[str, Any]) -> CommandOutcome:
        return self._create(
            self._store.customers,
            lambda: CustomerCreateRequest.from_payload(payload),
            "add_customer",
        )

    def update_customer(self, customer_id: str, changes: Mapping[str, Any]) -> CommandOutcome:
        customers = self._store.customers
        return self._update(
            customers, customer_id, changes,
            label="Customer",
            policy=lambda c: customer_update_policy(c, customers),
            policy_name="update_customer",
        )

    def delete_customer(self, customer_id: str) -> CommandOutcome:
        return self._delete(self._store.customers, customer_id)

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._store.customers.get(customer_id)

    def list_customers(self) -> List[Customer]:
        return self._store.customers.list()

    def search_customers(
        self, term: Optional[str] = None, customer_type: Any = None,
    ) -> List[Customer]:
        """
        Name and email match case-insensitively, phone by substring.

        Raises:
            ValueError: unknown customer type.
        """
        wanted = None if is_any_filter(customer_type) else coerce_enum(
            CustomerType, customer_type, "type",
        )
        return [
            customer for customer in self._store.customers.list()
            if text_matches(term, customer.name, customer.email, customer.phone)
            and (wanted is None or customer.type == wanted)
        ]
