"""Transaction – lifecycle states."""
from __future__ import annotations

from enum import Enum


class TransactionState(str, Enum):
    """Lifecycle of a :class:`DgraphTransaction`.

    ``ACTIVE`` is the only non-terminal state. Once ``CLOSED``,
    ``COMMITTED`` or ``ABORTED`` is entered the handle rejects further
    queries, mutations and commits; only ``abort()`` stays callable.
    """

    ACTIVE = "active"
    CLOSED = "closed"
    COMMITTED = "committed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self is not TransactionState.ACTIVE


__all__ = ["TransactionState"]
