"""Root error class for the dgraph-http error hierarchy."""

from __future__ import annotations

import json
import re
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Every error raised by the transaction handle is a structured value:
    a machine-readable ``code``, a human-readable ``message`` and a
    ``detail`` dict holding the inputs or server values involved.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    @staticmethod
    def code_of(exc: BaseException) -> str:
        """Return the ``code`` of *exc*, or its class name in snake case.

        Lets log events name any failure the same way, including exceptions
        raised by a caller-supplied HTTP client.
        """
        if isinstance(exc, BaseError):
            return exc.code
        return re.sub(r"(?<!^)(?=[A-Z])", "_", type(exc).__name__).lower()


__all__ = ["BaseError"]
