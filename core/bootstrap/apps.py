"""
Gestor Bootstrap - App Configuration
======================================
Validates the storage key map once Django finishes loading, so a
misconfigured GESTOR_STORAGE_KEYS stops the process before any
slot is written.

Rules:
- Runs once via ready()
- Skips during setup commands that never touch the store
- If the check fails → SystemBootstrapError prevents startup
"""

import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger("gestor.bootstrap")

# Commands that should NOT trigger bootstrap checks
SKIP_COMMANDS = {
    "migrate",
    "makemigrations",
    "showmigrations",
    "sqlmigrate",
    "flush",
    "dbshell",
    "inspectdb",
    "collectstatic",
}


def _is_management_command_skip():
    if len(sys.argv) >= 2:
        return sys.argv[1] in SKIP_COMMANDS
    return False


class BootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.bootstrap"
    label = "bootstrap"
    verbose_name = "Gestor Bootstrap"

    def ready(self):
        if _is_management_command_skip():
            logger.info("Bootstrap self-check skipped for management command.")
            return

        from core.bootstrap.self_check import run_bootstrap_checks
        from core.persistence.storage import storage_keys

        run_bootstrap_checks(storage_keys())
