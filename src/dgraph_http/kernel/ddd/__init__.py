"""Kernel DDD building blocks used by the transaction handle."""
from dgraph_http.kernel.ddd.unit_of_work import UnitOfWork

__all__ = ["UnitOfWork"]
