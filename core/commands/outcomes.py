"""
Gestor Command Layer - Mutation Outcome
=========================================
Every service call that may refuse produces exactly one outcome.

ACCEPTED → the mutation (or calculation) happened; ``record`` holds
           the resulting record, or None for a no-op delete.
REJECTED → nothing changed; ``reason`` is mandatory.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from core.commands.rejection import RejectionReason


class CommandStatus(Enum):
    """Binary decision. No middle ground."""
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CommandOutcome:
    """
    Invariants:
        - REJECTED + reason is None → ValueError
        - ACCEPTED + reason is not None → ValueError
    """

    status: CommandStatus
    occurred_at: datetime
    reason: Optional[RejectionReason] = None
    record: Any = None

    def __post_init__(self):
        if not isinstance(self.status, CommandStatus):
            raise ValueError(
                f"status must be CommandStatus, got {type(self.status).__name__}."
            )

        if self.status == CommandStatus.REJECTED and self.reason is None:
            raise ValueError(
                "REJECTED outcome must include a RejectionReason. "
                "No silent rejections allowed."
            )

        if self.status == CommandStatus.ACCEPTED and self.reason is not None:
            raise ValueError(
                "ACCEPTED outcome must NOT include a RejectionReason."
            )

        if not isinstance(self.occurred_at, datetime):
            raise ValueError("occurred_at must be datetime.")

    @classmethod
    def accepted(cls, record: Any, *, occurred_at: datetime) -> CommandOutcome:
        return cls(status=CommandStatus.ACCEPTED, occurred_at=occurred_at, record=record)

    @classmethod
    def rejected(cls, reason: RejectionReason, *, occurred_at: datetime) -> CommandOutcome:
        return cls(status=CommandStatus.REJECTED, occurred_at=occurred_at, reason=reason)

    @property
    def is_accepted(self) -> bool:
        return self.status == CommandStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == CommandStatus.REJECTED

    @property
    def message(self) -> Optional[str]:
        """User-facing message for rejections; None when accepted."""
        return self.reason.message if self.reason is not None else None
