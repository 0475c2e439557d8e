"""
Gestor Command Layer
======================
Every refused mutation is explained by a RejectionReason and every
service call that can refuse returns exactly one CommandOutcome.
"""

from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import ReasonCode, RejectionReason, validation_rejection
from core.commands.validator import (
    IMMUTABLE_FIELDS,
    changes_must_not_be_empty_policy,
    first_rejection,
    immutable_fields_policy,
    known_fields_policy,
)

__all__ = [
    "CommandOutcome",
    "CommandStatus",
    "ReasonCode",
    "RejectionReason",
    "validation_rejection",
    "IMMUTABLE_FIELDS",
    "changes_must_not_be_empty_policy",
    "immutable_fields_policy",
    "known_fields_policy",
    "first_rejection",
]
