"""
Gestor Catalog Engine - Service Layer
=======================================
Products and suppliers: create, update, delete, list, search.

Deleting a supplier does not touch products; a product's supplier
is free text, not a reference.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from core.commands.outcomes import CommandOutcome
from core.primitives.catalog import Product, ProductType, Supplier
from core.primitives.fields import coerce_enum
from core.store.service import CollectionService, is_any_filter, text_matches
from engines.catalog.commands import ProductCreateRequest, SupplierCreateRequest
from engines.catalog.policies import catalog_update_policy


class CatalogService(CollectionService):
    logger = logging.getLogger("gestor.catalog")

    # ── products ──────────────────────────────────────────────

    def add_product(self, payload: Mapping[str, Any]) -> CommandOutcome:
        return self._create(
            self._store.products,
            lambda: ProductCreateRequest.from_payload(payload),
            "add_product",
        )

    def update_product(self, product_id: str, changes: Mapping[str, Any]) -> CommandOutcome:
        products = self._store.products
        return self._update(
            products, product_id, changes,
            label="Product",
            policy=lambda c: catalog_update_policy(c, products),
            policy_name="update_product",
        )

    def delete_product(self, product_id: str) -> CommandOutcome:
        return self._delete(self._store.products, product_id)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._store.products.get(product_id)

    def list_products(self) -> List[Product]:
        return self._store.products.list()

    def search_products(
        self, term: Optional[str] = None, product_type: Any = None,
    ) -> List[Product]:
        """
        Match ``term`` against name or supplier; ``product_type`` of
        None or "all" means any type.

        Raises:
            ValueError: unknown product type.
        """
        wanted = None if is_any_filter(product_type) else coerce_enum(
            ProductType, product_type, "type",
        )
        return [
            product for product in self._store.products.list()
            if text_matches(term, product.name, product.supplier)
            and (wanted is None or product.type == wanted)
        ]

    # ── suppliers ─────────────────────────────────────────────

    def add_supplier(self, payload: Mapping[str, Any]) -> CommandOutcome:
        return self._create(
            self._store.suppliers,
            lambda: SupplierCreateRequest.from_payload(payload),
            "add_supplier",
        )

    def update_supplier(self, supplier_id: str, changes: Mapping[str, Any]) -> CommandOutcome:
        suppliers = self._store.suppliers
        return self._update(
            suppliers, supplier_id, changes,
            label="Supplier",
            policy=lambda c: catalog_update_policy(c, suppliers),
            policy_name="update_supplier",
        )

    def delete_supplier(self, supplier_id: str) -> CommandOutcome:
        return self._delete(self._store.suppliers, supplier_id)

    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        return self._store.suppliers.get(supplier_id)

    def list_suppliers(self) -> List[Supplier]:
        return self._store.suppliers.list()
