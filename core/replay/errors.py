"""
Ticketing Replay Engine — Errors
==================================
Error types for the journal replay layer.
"""


class ReplayError(Exception):
    """Base error for all replay operations."""
    pass


class ReplayChainBrokenError(ReplayError):
    """Hash-chain integrity failed — replay refused."""

    def __init__(self, sequence: int, detail: str):
        self.sequence = sequence
        self.detail = detail
        super().__init__(
            f"Replay refused — hash-chain broken at entry "
            f"#{sequence}: {detail}"
        )


class UnknownReplayEventError(ReplayError):
    """Journal holds an event type no engine owns."""

    def __init__(self, sequence: int, event_type: str):
        self.sequence = sequence
        self.event_type = event_type
        super().__init__(
            f"Replay refused — entry #{sequence} has unknown "
            f"event type '{event_type}'."
        )
