"""
Gestor Persistence - Storage Slot Model
=========================================
One row per slot key. ``value`` holds the serialized JSON text
exactly as written, so an unparsable value can be detected and
replaced by defaults on load instead of failing at the ORM layer.
"""

from django.db import models


class StorageSlot(models.Model):
    key = models.CharField(max_length=128, unique=True)
    value = models.TextField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gestor_storage_slot"
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key
