"""
Ticketing Event Journal — Errors
==================================
Error types for the journal layer. These signal programming or
integrity faults, never domain rejections.
"""


class JournalError(Exception):
    """Base error for event journal operations."""
    pass


class InvalidEventTypeFormat(JournalError):
    """Event type does not follow engine.domain.action.vN format."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Event type '{event_type}' does not follow "
            f"engine.domain.action.vN format."
        )


class UnknownEventTypeError(JournalError):
    """Event type was never registered with the journal."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Event type '{event_type}' is not registered.")


class JournalChainBrokenError(JournalError):
    """Stored hash does not match the recomputed hash."""

    def __init__(self, sequence: int, detail: str):
        self.sequence = sequence
        self.detail = detail
        super().__init__(
            f"Journal hash-chain broken at sequence {sequence}: {detail}"
        )
