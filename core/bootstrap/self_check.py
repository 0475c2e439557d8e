"""
Gestor Bootstrap - Self-Check
===============================
Checks run before the store is loaded. A broken storage key map
would make two slots overwrite each other, so it stops startup.
"""

import logging
from typing import Mapping

from core.bootstrap.errors import SystemBootstrapError
from core.store.store import ALL_SLOTS

logger = logging.getLogger("gestor.bootstrap")


def check_storage_keys(keys: Mapping[str, str]) -> None:
    missing = [slot for slot in ALL_SLOTS if not keys.get(slot)]
    if missing:
        raise SystemBootstrapError(
            "STORAGE_KEYS_COMPLETE",
            f"No storage key configured for slot(s): {', '.join(missing)}.",
        )
    used = [keys[slot] for slot in ALL_SLOTS]
    duplicates = sorted({key for key in used if used.count(key) > 1})
    if duplicates:
        raise SystemBootstrapError(
            "STORAGE_KEYS_UNIQUE",
            f"Storage key(s) shared by several slots: {', '.join(duplicates)}.",
        )


def run_bootstrap_checks(keys: Mapping[str, str]) -> None:
    logger.debug("Bootstrap self-check starting")
    check_storage_keys(keys)
    logger.debug("Bootstrap self-check passed")
