"""
Ticketing Platform Policy Engine — Event Types and Payload Builders
=====================================================================
Engine: platform_policy
Scope:  Platform fee percentage and minimum ticket price, both
        changeable only by the fixed admin identity.
"""

from __future__ import annotations

from core.commands.base import Command

PLATFORM_FEE_UPDATED_V1       = "platform_policy.fee.updated.v1"
MIN_TICKET_PRICE_UPDATED_V1   = "platform_policy.min_price.updated.v1"

PLATFORM_POLICY_EVENT_TYPES = (
    PLATFORM_FEE_UPDATED_V1,
    MIN_TICKET_PRICE_UPDATED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "platform_policy.fee.update.request":       PLATFORM_FEE_UPDATED_V1,
    "platform_policy.min_price.update.request": MIN_TICKET_PRICE_UPDATED_V1,
}


def resolve_platform_policy_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_platform_policy_event_types(journal) -> None:
    for et in sorted(PLATFORM_POLICY_EVENT_TYPES):
        journal.register_event_type(et)


def build_platform_fee_updated_payload(cmd: Command, height: int) -> dict:
    return {
        "new_fee_percent": cmd.payload["new_fee_percent"],
        "updated_by":      cmd.actor_id,
        "updated_at":      height,
    }


def build_min_ticket_price_updated_payload(cmd: Command, height: int) -> dict:
    return {
        "new_min_price": cmd.payload["new_min_price"],
        "updated_by":    cmd.actor_id,
        "updated_at":    height,
    }


PAYLOAD_BUILDERS = {
    PLATFORM_FEE_UPDATED_V1:     build_platform_fee_updated_payload,
    MIN_TICKET_PRICE_UPDATED_V1: build_min_ticket_price_updated_payload,
}
