"""
Gestor Persistence - Legacy Record Normalization
==================================================
Slots written by the original browser dashboard use camelCase
keys (``createdAt``, ``customerId``, ``productName``) and
Portuguese enum values (``caneca``, ``frequente``, ``pendente``).
Records are normalized on load; they are always written back in
the current shape.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from core.store.store import SLOT_CUSTOMERS, SLOT_ORDERS, SLOT_PRODUCTS

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

LEGACY_PRODUCT_TYPES = {
    "caneca": "mug",
    "ecobag": "tote-bag",
    "toalhinha": "towel",
    "camisa": "shirt",
    "azulejo": "tile",
    "outro": "other",
}

LEGACY_CUSTOMER_TYPES = {
    "novo": "new",
    "frequente": "frequent",
    "premium": "premium",
    "inativo": "inactive",
}

LEGACY_ORDER_STATUSES = {
    "pendente": "pending",
    "producao": "in_production",
    "em_producao": "in_production",
    "concluido": "completed",
    "cancelado": "cancelled",
}

_ENUM_FIELDS = {
    SLOT_PRODUCTS: ("type", LEGACY_PRODUCT_TYPES),
    SLOT_CUSTOMERS: ("type", LEGACY_CUSTOMER_TYPES),
    SLOT_ORDERS: ("status", LEGACY_ORDER_STATUSES),
}


def snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def snake_case_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {snake_case(key): value for key, value in data.items()}


def normalize_record(slot: str, raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``raw`` in the current record shape.

    Keys the record type does not know are left in place; the
    record's from_dict ignores them.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"{slot} entries must be objects.")
    data = snake_case_keys(raw)

    enum_field = _ENUM_FIELDS.get(slot)
    if enum_field is not None:
        field, legacy_values = enum_field
        value = data.get(field)
        if isinstance(value, str) and value in legacy_values:
            data[field] = legacy_values[value]

    if slot == SLOT_ORDERS and isinstance(data.get("items"), list):
        data["items"] = [
            snake_case_keys(item) if isinstance(item, Mapping) else item
            for item in data["items"]
        ]
    return data
