"""
Ticketing Bootstrap — System Errors
=====================================
If a core invariant is violated at startup,
the platform must refuse to live.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a critical system invariant is violated during boot.

    If this exception is raised:
    - The platform MUST NOT serve commands
    - No fallback
    - No warning-only mode
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"TICKETING BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
