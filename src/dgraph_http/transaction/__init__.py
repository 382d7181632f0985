"""Transaction – Dgraph HTTP transaction handle and its wire types."""
from dgraph_http.transaction.content_type import ContentType
from dgraph_http.transaction.handle import DgraphTransaction, delete_block, set_block
from dgraph_http.transaction.state import TransactionState
from dgraph_http.transaction.txn_context import TxnContext

__all__ = [
    "ContentType",
    "DgraphTransaction",
    "TransactionState",
    "TxnContext",
    "delete_block",
    "set_block",
]
