"""
Gestor Core Primitives - Record Identifiers
=============================================
Ids are opaque strings, unique within a collection for the life
of the store. Random 128-bit ids are the default; the sequential
generator exists for fixtures and tests that want readable ids.
"""

from __future__ import annotations

import itertools
import threading
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """Source of fresh record ids."""

    def new_id(self) -> str:
        ...  # pragma: no cover


class UuidIdGenerator:
    """Random UUID4 ids rendered as 32 hex characters."""

    def new_id(self) -> str:
        return uuid.uuid4().hex


class SequentialIdGenerator:
    """
    Monotonic counter ids: ``<prefix>1``, ``<prefix>2``, ...

    Safe under concurrent callers; never reuses a value.
    """

    def __init__(self, prefix: str = "", start: int = 1) -> None:
        if start < 0:
            raise ValueError("start must be >= 0.")
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self._prefix}{value}"
