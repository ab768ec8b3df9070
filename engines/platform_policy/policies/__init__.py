"""
Ticketing Platform Policy Engine — Policies
=============================================
Admin guard and parameter range checks.
"""

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason


def caller_must_be_admin_policy(
    command,
    admin_identity: str,
) -> Optional[RejectionReason]:
    """Only the admin fixed at boot may change platform policy."""
    if command.actor_id != admin_identity:
        return RejectionReason(
            code=ReasonCode.NOT_AUTHORIZED,
            message=f"'{command.actor_id}' is not the platform admin.",
            policy_name="caller_must_be_admin_policy",
        )
    return None


def fee_must_be_percentage_policy(command) -> Optional[RejectionReason]:
    """Fee percent must lie within 0..100."""
    fee = command.payload.get("new_fee_percent", 0)
    if fee > 100:
        return RejectionReason(
            code=ReasonCode.INVALID_FEE,
            message=f"Fee percent must be <= 100, got {fee}.",
            policy_name="fee_must_be_percentage_policy",
        )
    return None


def min_price_must_be_positive_policy(command) -> Optional[RejectionReason]:
    price = command.payload.get("new_min_price", 0)
    if price <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_PRICE,
            message="Minimum ticket price must be positive.",
            policy_name="min_price_must_be_positive_policy",
        )
    return None
