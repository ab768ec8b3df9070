"""
Ticketing Platform Policy Engine — Projection Store + Service
===============================================================
Holds the singleton platform policy. The admin identity is fixed at
construction and never changes; fee and minimum price move only via
journaled admin commands.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List

from core.commands.base import Command
from core.commands.bus import ExecutionResult
from core.config.rules import TicketingConfig
from engines.platform_policy.commands import (
    MIN_TICKET_PRICE_UPDATE_REQUEST,
    PLATFORM_FEE_UPDATE_REQUEST,
    PLATFORM_POLICY_COMMAND_TYPES,
)
from engines.platform_policy.events import (
    MIN_TICKET_PRICE_UPDATED_V1,
    PAYLOAD_BUILDERS,
    PLATFORM_FEE_UPDATED_V1,
    register_platform_policy_event_types,
    resolve_platform_policy_event_type,
)
from engines.platform_policy.policies import (
    caller_must_be_admin_policy,
    fee_must_be_percentage_policy,
    min_price_must_be_positive_policy,
)


@dataclass(frozen=True)
class PlatformPolicy:
    admin_identity: str
    min_ticket_price: int
    platform_fee_percent: int

    def to_dict(self) -> dict:
        return {
            "admin_identity": self.admin_identity,
            "min_ticket_price": self.min_ticket_price,
            "platform_fee_percent": self.platform_fee_percent,
        }


def calculate_platform_fee(amount: int, fee_percent: int) -> int:
    """floor(amount * fee_percent / 100) in integer arithmetic."""
    return amount * fee_percent // 100


class PlatformPolicyProjectionStore:
    """In-memory read model of the platform policy singleton."""

    def __init__(self, *, admin_identity: str, min_ticket_price: int,
                 platform_fee_percent: int):
        self._events: List[dict] = []
        self._policy = PlatformPolicy(
            admin_identity=admin_identity,
            min_ticket_price=min_ticket_price,
            platform_fee_percent=platform_fee_percent,
        )

    @classmethod
    def from_config(cls, config: TicketingConfig) -> PlatformPolicyProjectionStore:
        return cls(
            admin_identity=config.admin_identity,
            min_ticket_price=config.min_ticket_price,
            platform_fee_percent=config.platform_fee_percent,
        )

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == PLATFORM_FEE_UPDATED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            self._policy = replace(
                self._policy, platform_fee_percent=payload["new_fee_percent"]
            )

        elif event_type == MIN_TICKET_PRICE_UPDATED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            self._policy = replace(
                self._policy, min_ticket_price=payload["new_min_price"]
            )

    # ── queries ───────────────────────────────────────────────

    @property
    def policy(self) -> PlatformPolicy:
        return self._policy

    @property
    def admin_identity(self) -> str:
        return self._policy.admin_identity

    def get_min_price(self) -> int:
        return self._policy.min_ticket_price

    def get_fee_percent(self) -> int:
        return self._policy.platform_fee_percent

    def calculate_platform_fee(self, amount: int) -> int:
        return calculate_platform_fee(amount, self._policy.platform_fee_percent)

    @property
    def event_count(self) -> int:
        return len(self._events)

    # ── transaction participation ─────────────────────────────

    def checkpoint(self):
        return self._policy, len(self._events)

    def restore(self, checkpoint) -> None:
        self._policy, event_count = checkpoint
        del self._events[event_count:]


class _PlatformPolicyCommandHandler:
    def __init__(self, service: "PlatformPolicyService"):
        self._service = service

    def execute(self, command: Command, height: int) -> ExecutionResult:
        return self._service._execute_command(command, height)


class PlatformPolicyService:
    def __init__(self, *, transaction_engine, journal,
                 projection_store: PlatformPolicyProjectionStore):
        self._journal = journal
        self._projection = projection_store

        register_platform_policy_event_types(journal)
        journal.subscribe(projection_store)
        transaction_engine.register_participant(projection_store)

        handler = _PlatformPolicyCommandHandler(self)
        for command_type in sorted(PLATFORM_POLICY_COMMAND_TYPES):
            transaction_engine.register_handler(command_type, handler)

    def _run_policies(self, command: Command):
        rejection = caller_must_be_admin_policy(
            command, admin_identity=self._projection.admin_identity
        )
        if rejection is not None:
            return rejection

        if command.command_type == PLATFORM_FEE_UPDATE_REQUEST:
            return fee_must_be_percentage_policy(command)

        if command.command_type == MIN_TICKET_PRICE_UPDATE_REQUEST:
            return min_price_must_be_positive_policy(command)

        return None

    def _execute_command(self, command: Command, height: int) -> ExecutionResult:
        event_type = resolve_platform_policy_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported platform policy command: {command.command_type}")

        rejection = self._run_policies(command)
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        payload = PAYLOAD_BUILDERS[event_type](command, height)
        entry = self._journal.append(
            event_type=event_type, payload=payload, command=command, height=height,
        )
        return ExecutionResult.accept(True, (entry,))

    @property
    def projection_store(self) -> PlatformPolicyProjectionStore:
        return self._projection
