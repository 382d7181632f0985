"""Unit of Work port – transactional boundary."""

from __future__ import annotations

import abc
from typing import Any


class UnitOfWork(abc.ABC):
    """Port: transactional unit of work.

    Used as an async context manager, a clean exit finalises the work with
    :meth:`commit` and an exception rolls it back with :meth:`abort` before
    propagating. Implementations whose work was already finalised inside
    the block report that through :meth:`is_pending`.
    """

    @abc.abstractmethod
    async def commit(self) -> Any: ...

    @abc.abstractmethod
    async def abort(self) -> Any: ...

    def is_pending(self) -> bool:
        return True

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            if self.is_pending():
                await self.commit()
        else:
            await self.abort()


__all__ = ["UnitOfWork"]
