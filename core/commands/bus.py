"""
Ticketing Command Layer — Transaction Engine
==============================================
Single entry point for every state-changing call.

Flow:
    1. Serialize (one command at a time)
    2. Read the height clock exactly once
    3. Checkpoint every participant (stores, journal, value ledger)
    4. Call the engine service handler
    5. ACCEPTED → keep effects; REJECTED or exception → restore all

The TransactionEngine:
- Orchestrates, does not decide (policies live in engines)
- Guarantees all-or-nothing effects per command
- Produces exactly one CommandOutcome per command

The TransactionEngine does NOT:
- Contain engine-specific logic
- Retry anything
- Swallow unexpected exceptions (they propagate after rollback)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple

from core.commands.base import Command
from core.commands.outcomes import CommandOutcome
from core.commands.rejection import RejectionReason

logger = logging.getLogger("ticketing.commands")


# ══════════════════════════════════════════════════════════════
# EXECUTION RESULT (engine → bus)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExecutionResult:
    """
    What an engine service hands back for one command.

    Exactly one of `rejection` / `value` is meaningful.
    """

    value: Any = True
    rejection: Optional[RejectionReason] = None
    entries: Tuple[Any, ...] = ()

    @classmethod
    def accept(cls, value: Any = True, entries: Tuple[Any, ...] = ()) -> ExecutionResult:
        return cls(value=value, entries=tuple(entries))

    @classmethod
    def reject(cls, reason: RejectionReason) -> ExecutionResult:
        return cls(value=None, rejection=reason)

    @property
    def is_rejected(self) -> bool:
        return self.rejection is not None


# ══════════════════════════════════════════════════════════════
# PROTOCOLS
# ══════════════════════════════════════════════════════════════

class EngineServiceProtocol(Protocol):
    """
    Each engine registers a handler that executes a command at the
    given height and returns an ExecutionResult.
    """

    def execute(self, command: Command, height: int) -> ExecutionResult:
        ...


class TransactionParticipant(Protocol):
    def checkpoint(self) -> Any:
        ...

    def restore(self, checkpoint: Any) -> None:
        ...


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class CommandBusError(Exception):
    """Base error for transaction engine operations."""
    pass


class NoHandlerRegistered(CommandBusError):
    """No engine service handler registered for command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine service handler registered for "
            f"command type '{command_type}'."
        )


class DuplicateHandlerError(CommandBusError):
    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(f"Handler already registered for '{command_type}'.")


# ══════════════════════════════════════════════════════════════
# TRANSACTION ENGINE
# ══════════════════════════════════════════════════════════════

class TransactionEngine:
    """
    Serialized, atomic command execution.

    Usage:
        engine = TransactionEngine(clock=clock, value_ledger=ledger, journal=journal)
        engine.register_participant(registry_store)
        engine.register_handler("event_registry.event.create.request", service)
        outcome = engine.handle(command)
    """

    def __init__(self, *, clock, value_ledger, journal) -> None:
        self._clock = clock
        self._value_ledger = value_ledger
        self._journal = journal
        self._handlers: Dict[str, Any] = {}
        self._participants: List[Any] = [journal, value_ledger]
        self._lock = threading.Lock()

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register_handler(self, command_type: str, handler: Any) -> None:
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )
        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise TypeError("Handler must have callable .execute() method.")
        if command_type in self._handlers:
            raise DuplicateHandlerError(command_type)

        self._handlers[command_type] = handler
        logger.debug(f"Handler registered: {command_type}")

    def register_participant(self, participant: Any) -> None:
        """Anything holding mutable state that must roll back with the command."""
        for name in ("checkpoint", "restore"):
            if not callable(getattr(participant, name, None)):
                raise TypeError(f"Participant must have callable .{name}() method.")
        if any(existing is participant for existing in self._participants):
            return
        self._participants.append(participant)

    @property
    def registered_command_types(self) -> frozenset:
        return frozenset(self._handlers)

    @property
    def clock(self):
        return self._clock

    # ══════════════════════════════════════════════════════════
    # HANDLE (main orchestration)
    # ══════════════════════════════════════════════════════════

    def handle(self, command: Command) -> CommandOutcome:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        with self._lock:
            height = self._clock.current_height()
            checkpoints = [(p, p.checkpoint()) for p in self._participants]

            try:
                result = handler.execute(command, height)
            except Exception:
                self._rollback(checkpoints)
                logger.error(
                    f"Command {command.command_id} ({command.command_type}) "
                    f"raised; state rolled back.",
                    exc_info=True,
                )
                raise

            if result.is_rejected:
                self._rollback(checkpoints)
                logger.info(
                    f"Command {command.command_id} REJECTED "
                    f"({command.command_type}, actor {command.actor_id}): "
                    f"{result.rejection.code} by {result.rejection.policy_name}"
                )
                return CommandOutcome.rejected(command.command_id, height, result.rejection)

            logger.info(
                f"Command {command.command_id} ACCEPTED "
                f"({command.command_type}, actor {command.actor_id}, "
                f"height {height}, {len(result.entries)} entries)"
            )
            return CommandOutcome.accepted(command.command_id, height, result.value)

    def _rollback(self, checkpoints) -> None:
        for participant, checkpoint in reversed(checkpoints):
            participant.restore(checkpoint)
