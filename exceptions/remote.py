"""
Exceptions raised at the external boundaries (remote store, summarizer).

These never propagate into the in-memory register state: callers catch
them, log, and continue.
"""

from .base import StallPosException


class RemoteSyncException(StallPosException):
    """Raised when a call to the remote order/ledger store fails."""

    def __init__(self, operation: str, reason: str, status: int | None = None):
        super().__init__(
            f"Remote sync failed during {operation}: {reason}",
            details={'operation': operation, 'reason': reason, 'status': status}
        )
        self.operation = operation
        self.reason = reason
        self.status = status


class SummarizerUnavailableException(StallPosException):
    """Raised when the insight summarizer has no credential or the request fails."""

    def __init__(self, reason: str):
        super().__init__(
            f"Summarizer unavailable: {reason}",
            details={'reason': reason}
        )
        self.reason = reason
