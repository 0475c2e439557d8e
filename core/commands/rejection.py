"""
Gestor Command Layer - Rejection Model
========================================
Structured reasons for refused mutations.

A rejection is how a validation failure reaches the caller: the
store is left untouched and the message is fit to show the shop
owner as-is.

Every rejection is:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused mutation.

    Fields:
        code:        Machine-readable rejection code (e.g. 'VALIDATION_FAILED').
        message:     Human-readable explanation.
        policy_name: Name of the policy or step that refused.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Input ─────────────────────────────────────────────────
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    IMMUTABLE_FIELD = "IMMUTABLE_FIELD"
    DERIVED_FIELD_READONLY = "DERIVED_FIELD_READONLY"

    # ── Lookup ────────────────────────────────────────────────
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"

    # ── Orders ────────────────────────────────────────────────
    ORDER_TOTAL_MISMATCH = "ORDER_TOTAL_MISMATCH"
    ILLEGAL_STATUS_TRANSITION = "ILLEGAL_STATUS_TRANSITION"

    # ── Pricing configuration ─────────────────────────────────
    INVALID_FEE = "INVALID_FEE"


def validation_rejection(exc: ValueError, policy_name: str) -> RejectionReason:
    """Wrap a record/request ValueError as a VALIDATION_FAILED reason."""
    return RejectionReason(
        code=ReasonCode.VALIDATION_FAILED,
        message=str(exc) or "Invalid input.",
        policy_name=policy_name,
    )
