"""
dgraph_http – client-side transactions over the Dgraph HTTP API.

Import path convention::

    from dgraph_http import DgraphTransaction, TransactionOptions
    from dgraph_http.kernel.errors import AlreadyCommittedError, HttpStatusError
    from dgraph_http.observability.logging import JsonLoggerFactory
"""

from dgraph_http.config import TransactionOptions
from dgraph_http.transaction import DgraphTransaction, TransactionState

__version__ = "0.1.0"
__all__ = ["DgraphTransaction", "TransactionOptions", "TransactionState", "__version__"]
