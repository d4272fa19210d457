from __future__ import annotations


class InvalidStateError(RuntimeError):
    """Raised when an operation is not allowed in the current timer mode."""


class TaskStoreError(OSError):
    """Raised when the task file cannot be read or written."""
