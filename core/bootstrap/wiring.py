"""
Gestor Bootstrap - Application Wiring
=======================================
Builds one ShopApplication: store, persistence mirror, engine
services and the dashboard read model, all sharing the same store
instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from core.bootstrap.self_check import run_bootstrap_checks
from core.persistence.mirror import PersistenceMirror
from core.persistence.storage import InMemorySlotStorage, SlotStorage, storage_keys
from core.primitives.ids import IdGenerator
from core.store.store import EntityStore
from core.time.clock import Clock
from engines.catalog.services import CatalogService
from engines.customer.services import CustomerService
from engines.order.services import OrderService
from engines.pricing.services import PricingService
from projections.dashboard import DashboardReadModel

logger = logging.getLogger("gestor.bootstrap")


@dataclass(frozen=True)
class ShopApplication:
    store: EntityStore
    mirror: PersistenceMirror
    pricing: PricingService
    catalog: CatalogService
    customers: CustomerService
    orders: OrderService
    dashboard: DashboardReadModel


def bootstrap(
    storage: Optional[SlotStorage] = None,
    *,
    clock: Optional[Clock] = None,
    id_generator: Optional[IdGenerator] = None,
    keys: Optional[Dict[str, str]] = None,
) -> ShopApplication:
    """
    Load the store from ``storage`` and start mirroring to it.

    Without a storage the application runs on a fresh in-memory
    storage (nothing survives the process).
    """
    keys = keys or storage_keys()
    run_bootstrap_checks(keys)

    store = EntityStore(clock=clock, id_generator=id_generator)
    mirror = PersistenceMirror(
        store, storage if storage is not None else InMemorySlotStorage(), keys=keys,
    )
    loaded = mirror.load()
    mirror.attach()

    app = ShopApplication(
        store=store,
        mirror=mirror,
        pricing=PricingService(store=store),
        catalog=CatalogService(store=store),
        customers=CustomerService(store=store),
        orders=OrderService(store=store),
        dashboard=DashboardReadModel(store),
    )
    logger.info(f"Gestor started: {loaded}")
    return app
