"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError               (domain.py)
    │   ├── TransactionStateError
    │   │   ├── AlreadyAbortedError
    │   │   ├── AlreadyCommittedError
    │   │   └── AlreadyClosedError
    │   ├── ValidationError
    │   │   ├── EmptyMutationError
    │   │   └── ConflictingMutationError
    │   ├── ReadOnlyViolationError
    │   └── StartTsMismatchError
    ├── ApplicationError          (application.py)
    └── InfrastructureError       (infrastructure.py)
        ├── ConnectionError
        ├── TimeoutError
        ├── SerializationError
        └── ExternalServiceError
            └── HttpStatusError

Configuration errors (``ConfigError`` and friends) derive from
``ApplicationError`` and live in :mod:`dgraph_http.config.validation`.
"""

from dgraph_http.kernel.errors.application import ApplicationError
from dgraph_http.kernel.errors.base import BaseError
from dgraph_http.kernel.errors.domain import (
    AlreadyAbortedError,
    AlreadyClosedError,
    AlreadyCommittedError,
    ConflictingMutationError,
    DomainError,
    EmptyMutationError,
    ReadOnlyViolationError,
    StartTsMismatchError,
    TransactionStateError,
    ValidationError,
)
from dgraph_http.kernel.errors.infrastructure import (
    ConnectionError,
    ExternalServiceError,
    HttpStatusError,
    InfrastructureError,
    SerializationError,
)
from dgraph_http.kernel.errors.infrastructure import TimeoutError as InfrastructureTimeoutError

__all__ = [
    "AlreadyAbortedError",
    "AlreadyClosedError",
    "AlreadyCommittedError",
    "ApplicationError",
    "BaseError",
    "ConflictingMutationError",
    "ConnectionError",
    "DomainError",
    "EmptyMutationError",
    "ExternalServiceError",
    "HttpStatusError",
    "InfrastructureError",
    "InfrastructureTimeoutError",
    "ReadOnlyViolationError",
    "SerializationError",
    "StartTsMismatchError",
    "TransactionStateError",
    "ValidationError",
]
