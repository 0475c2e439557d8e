"""
Gestor Core - Persistence App Configuration
=============================================
Durable key-value slots that mirror the in-memory store.

This app:
- Stores one JSON document per slot (products, orders, fees, ...)
- Overwrites a slot wholesale on every write (last write wins)

This app does NOT:
- Interpret slot content
- Keep history of previous values
"""

from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.persistence"
    label = "persistence"
    verbose_name = "Gestor Persistence Mirror"
