"""
Exception and warning types for half-edge diagrams.

Every failure raised by the core derives from TopologyError and carries
structured context (the offending handles and the name of the violated
invariant) so callers and tests can inspect failures without parsing
messages.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class TopologyError(RuntimeError):
    """
    Base exception for half-edge diagram failures.

    Attributes:
        handles: Handles or face ids involved in the failure
        invariant: Short name of the violated invariant, if any
    """

    def __init__(
        self,
        message: str,
        handles: Sequence[Any] = (),
        invariant: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.handles = tuple(handles)
        self.invariant = invariant


class PreconditionError(TopologyError):
    """Raised when an operation is called with its precondition violated."""

    pass


class CorruptionError(TopologyError):
    """Raised when a traversal shows that an earlier mutation broke an invariant."""

    pass


class StaleHandleError(TopologyError, KeyError):
    """Raised when a removed (or never created) vertex or edge is dereferenced."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class DanglingFaceWarning(UserWarning):
    """Warning issued when a removal leaves a face without a live representative edge."""

    pass


__all__ = [
    "TopologyError",
    "PreconditionError",
    "CorruptionError",
    "StaleHandleError",
    "DanglingFaceWarning",
]
