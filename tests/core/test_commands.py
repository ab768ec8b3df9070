"""
Ticketing Command Layer — Comprehensive Tests
===============================================
Tests for the Command → TransactionEngine → Outcome chain.

Required test scenarios:
1. Valid command → ACCEPTED with the handler's value
2. Invalid structure → validation error
3. Handler rejection → REJECTED outcome, every participant restored
4. Handler exception → propagates, every participant restored
5. Unknown command type → NoHandlerRegistered
6. Clock read exactly once per command
"""

from __future__ import annotations

import uuid

import pytest

from core.commands.base import (
    Command,
    derive_source_engine,
    require_identity,
    require_text,
    require_uint,
)
from core.commands.bus import (
    DuplicateHandlerError,
    ExecutionResult,
    NoHandlerRegistered,
    TransactionEngine,
)
from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import REASON_NUMBERS, ReasonCode, RejectionReason
from core.events.journal import EventJournal
from core.primitives.ledger import InMemoryValueLedger
from core.time.clock import FixedHeightClock


COMMAND_TYPE = "ticket_ledger.ticket.purchase.request"
EVENT_TYPE = "ticket_ledger.ticket.purchased.v1"


# ══════════════════════════════════════════════════════════════
# TEST INFRASTRUCTURE — STUBS
# ══════════════════════════════════════════════════════════════

class CountingClock:
    def __init__(self, height: int = 10):
        self.height = height
        self.reads = 0

    def current_height(self) -> int:
        self.reads += 1
        return self.height


class StubHandler:
    """Journals one entry and moves value, then decides per `mode`."""

    def __init__(self, journal, ledger, mode: str = "accept"):
        self.journal = journal
        self.ledger = ledger
        self.mode = mode
        self.heights = []

    def execute(self, command, height):
        self.heights.append(height)
        self.ledger.transfer("buyer", "organizer", 100)
        entry = self.journal.append(
            event_type=EVENT_TYPE, payload={"n": 1}, command=command, height=height,
        )
        if self.mode == "reject":
            return ExecutionResult.reject(RejectionReason(
                code=ReasonCode.SOLD_OUT,
                message="Sold out.",
                policy_name="stub_policy",
            ))
        if self.mode == "raise":
            raise RuntimeError("handler exploded")
        return ExecutionResult.accept(42, (entry,))


class SnapshotStore:
    def __init__(self):
        self.items = []

    def apply(self, event_type, payload):
        self.items.append(event_type)

    def checkpoint(self):
        return list(self.items)

    def restore(self, checkpoint):
        self.items = list(checkpoint)


def _command(**overrides):
    values = dict(
        command_type=COMMAND_TYPE,
        actor_id="buyer",
        payload={"event_id": 1},
        source_engine="ticket_ledger",
    )
    values.update(overrides)
    return Command(**values)


@pytest.fixture
def journal():
    j = EventJournal()
    j.register_event_type(EVENT_TYPE)
    return j


@pytest.fixture
def ledger():
    return InMemoryValueLedger({"buyer": 1_000})


def _engine(journal, ledger, clock=None, mode="accept"):
    engine = TransactionEngine(
        clock=clock or FixedHeightClock(10), value_ledger=ledger, journal=journal,
    )
    handler = StubHandler(journal, ledger, mode=mode)
    engine.register_handler(COMMAND_TYPE, handler)
    return engine, handler


# ══════════════════════════════════════════════════════════════
# COMMAND STRUCTURE
# ══════════════════════════════════════════════════════════════

class TestCommandStructure:
    def test_valid_command(self):
        cmd = _command()
        assert isinstance(cmd.command_id, uuid.UUID)
        assert cmd.source_engine == "ticket_ledger"

    def test_frozen(self):
        cmd = _command()
        with pytest.raises(AttributeError):
            cmd.actor_id = "someone-else"

    def test_type_must_end_with_request(self):
        with pytest.raises(ValueError, match=".request"):
            _command(command_type="ticket_ledger.ticket.purchase")

    def test_type_needs_four_segments(self):
        with pytest.raises(ValueError, match="4 segments"):
            _command(command_type="ticket_ledger.purchase.request")

    def test_namespace_must_match_source_engine(self):
        with pytest.raises(ValueError, match="does not match"):
            _command(source_engine="event_registry")

    def test_empty_actor_rejected(self):
        with pytest.raises(ValueError):
            _command(actor_id="")

    def test_payload_must_be_dict(self):
        with pytest.raises(TypeError):
            _command(payload=[1, 2])

    def test_derive_source_engine(self):
        assert derive_source_engine(COMMAND_TYPE) == "ticket_ledger"


class TestRequestFieldChecks:
    def test_require_uint_accepts_zero(self):
        require_uint(0, "n")

    @pytest.mark.parametrize("value", [True, 1.5, "3", None])
    def test_require_uint_rejects_non_int(self, value):
        with pytest.raises(TypeError):
            require_uint(value, "n")

    def test_require_uint_rejects_negative(self):
        with pytest.raises(ValueError):
            require_uint(-1, "n")

    def test_require_text(self):
        require_text("", "name")
        with pytest.raises(TypeError):
            require_text(3, "name")

    def test_require_identity(self):
        with pytest.raises(ValueError):
            require_identity("", "caller")


# ══════════════════════════════════════════════════════════════
# REJECTION + OUTCOME
# ══════════════════════════════════════════════════════════════

class TestRejectionReason:
    def test_numbers_are_stable(self):
        assert REASON_NUMBERS[ReasonCode.NOT_AUTHORIZED] == 1
        assert REASON_NUMBERS[ReasonCode.SOLD_OUT] == 3
        assert REASON_NUMBERS[ReasonCode.TICKET_USED] == 10
        assert REASON_NUMBERS[ReasonCode.TRANSFER_FAILED] == 13
        assert sorted(REASON_NUMBERS.values()) == list(range(1, 14))

    def test_unknown_code_rejected(self):
        with pytest.raises(ValueError, match="not a known"):
            RejectionReason(code="NOPE", message="x", policy_name="p")

    def test_empty_message_rejected(self):
        with pytest.raises(ValueError):
            RejectionReason(code=ReasonCode.SOLD_OUT, message="", policy_name="p")

    def test_to_dict(self):
        reason = RejectionReason(
            code=ReasonCode.INVALID_FEE, message="too high", policy_name="fee_policy",
        )
        assert reason.to_dict() == {
            "code": "INVALID_FEE",
            "number": 12,
            "message": "too high",
            "policy_name": "fee_policy",
        }


class TestCommandOutcome:
    def test_accepted(self):
        outcome = CommandOutcome.accepted(uuid.uuid4(), 5, value=7)
        assert outcome.is_accepted
        assert outcome.value == 7
        assert outcome.error_code is None

    def test_rejected_requires_reason(self):
        with pytest.raises(ValueError, match="RejectionReason"):
            CommandOutcome(
                command_id=uuid.uuid4(),
                status=CommandStatus.REJECTED,
                reason=None,
                height=0,
            )

    def test_rejected_carries_no_value(self):
        reason = RejectionReason(code=ReasonCode.SOLD_OUT, message="m", policy_name="p")
        with pytest.raises(ValueError):
            CommandOutcome(
                command_id=uuid.uuid4(),
                status=CommandStatus.REJECTED,
                reason=reason,
                height=0,
                value=1,
            )

    def test_negative_height_rejected(self):
        with pytest.raises(ValueError):
            CommandOutcome.accepted(uuid.uuid4(), -1)


# ══════════════════════════════════════════════════════════════
# TRANSACTION ENGINE
# ══════════════════════════════════════════════════════════════

class TestTransactionEngine:
    def test_accepted_keeps_effects(self, journal, ledger):
        engine, handler = _engine(journal, ledger)
        cmd = _command()

        outcome = engine.handle(cmd)

        assert outcome.is_accepted
        assert outcome.value == 42
        assert outcome.height == 10
        assert outcome.command_id == cmd.command_id
        assert len(journal) == 1
        assert ledger.balance_of("organizer") == 100

    def test_rejection_restores_journal_and_ledger(self, journal, ledger):
        engine, _ = _engine(journal, ledger, mode="reject")
        store = SnapshotStore()
        journal.subscribe(store)
        engine.register_participant(store)

        outcome = engine.handle(_command())

        assert outcome.is_rejected
        assert outcome.error_code == ReasonCode.SOLD_OUT
        assert outcome.value is None
        assert len(journal) == 0
        assert ledger.balance_of("buyer") == 1_000
        assert ledger.balance_of("organizer") == 0
        assert ledger.receipts == ()
        assert store.items == []

    def test_exception_propagates_after_rollback(self, journal, ledger):
        engine, _ = _engine(journal, ledger, mode="raise")

        with pytest.raises(RuntimeError, match="exploded"):
            engine.handle(_command())

        assert len(journal) == 0
        assert ledger.balance_of("buyer") == 1_000

    def test_unknown_command_type(self, journal, ledger):
        engine, _ = _engine(journal, ledger)
        with pytest.raises(NoHandlerRegistered):
            engine.handle(_command(
                command_type="ticket_ledger.ticket.resell.request",
            ))

    def test_duplicate_handler(self, journal, ledger):
        engine, handler = _engine(journal, ledger)
        with pytest.raises(DuplicateHandlerError):
            engine.register_handler(COMMAND_TYPE, handler)

    def test_handler_type_must_end_with_request(self, journal, ledger):
        engine, handler = _engine(journal, ledger)
        with pytest.raises(ValueError):
            engine.register_handler("ticket_ledger.ticket.purchased.v1", handler)

    def test_participant_needs_checkpoint_and_restore(self, journal, ledger):
        engine, _ = _engine(journal, ledger)
        with pytest.raises(TypeError):
            engine.register_participant(object())

    def test_clock_read_once_per_command(self, journal, ledger):
        clock = CountingClock(height=33)
        engine, handler = _engine(journal, ledger, clock=clock)

        engine.handle(_command())

        assert clock.reads == 1
        assert handler.heights == [33]

    def test_registered_command_types(self, journal, ledger):
        engine, _ = _engine(journal, ledger)
        assert engine.registered_command_types == frozenset({COMMAND_TYPE})
