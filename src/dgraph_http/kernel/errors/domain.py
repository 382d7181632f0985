"""Domain errors – transaction state, mutation input and protocol violations.

None of these touch the network: they are raised before a request is built
(state and input checks) or after a successful exchange whose metadata
contradicts the handle (start timestamp drift).
"""

from __future__ import annotations

from typing import Any

from dgraph_http.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a transaction rule is violated."""

    default_code = "domain_error"


class TransactionStateError(DomainError):
    """The handle reached a terminal state and refuses further work."""

    default_code = "transaction_state_error"


class AlreadyAbortedError(TransactionStateError):
    default_code = "already_aborted"

    def __init__(self, message: str = "Transaction already aborted", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class AlreadyCommittedError(TransactionStateError):
    default_code = "already_committed"

    def __init__(self, message: str = "Transaction already committed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class AlreadyClosedError(TransactionStateError):
    default_code = "already_closed"

    def __init__(self, message: str = "Transaction already closed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ValidationError(DomainError):
    """Operation input does not meet validation rules."""

    default_code = "validation_error"


class EmptyMutationError(ValidationError):
    """Neither a ``mutation`` nor a ``remove`` block was supplied."""

    default_code = "empty_mutation"

    def __init__(
        self,
        message: str = "Mutate requires a mutation or a remove string",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class ConflictingMutationError(ValidationError):
    """Both ``mutation`` and ``remove`` were supplied in one call."""

    default_code = "conflicting_mutation"

    def __init__(
        self,
        message: str = "Mutate accepts a mutation or a remove string but not both",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class ReadOnlyViolationError(DomainError):
    default_code = "read_only_violation"

    def __init__(
        self,
        message: str = "Read-only transactions may not contain mutations",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class StartTsMismatchError(DomainError):
    """A response reported a start timestamp other than the adopted one.

    The transaction identity must never drift; both values are kept on the
    error and in ``detail``.
    """

    default_code = "start_ts_mismatch"

    def __init__(self, transaction_start_ts: int, response_start_ts: int, **kwargs: Any) -> None:
        super().__init__(
            "The start_ts of the last response does not match the start_ts of the transaction",
            detail={
                "transaction_start_ts": transaction_start_ts,
                "response_start_ts": response_start_ts,
            },
            **kwargs,
        )
        self.transaction_start_ts = transaction_start_ts
        self.response_start_ts = response_start_ts


__all__ = [
    "AlreadyAbortedError",
    "AlreadyClosedError",
    "AlreadyCommittedError",
    "ConflictingMutationError",
    "DomainError",
    "EmptyMutationError",
    "ReadOnlyViolationError",
    "StartTsMismatchError",
    "TransactionStateError",
    "ValidationError",
]
