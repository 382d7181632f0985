"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Mapping, TypeVar

from dgraph_http.config.validation import ConfigError

S = TypeVar("S", bound="Settings")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Subclasses set ``_prefix`` to namespace their environment variables,
    list credential fields in ``_secret_fields`` so that ``repr()`` masks
    them, and override :meth:`_validate` for cross-field checks. Subclasses
    that want the masked repr must be declared with
    ``@dataclass(repr=False)``.
    """

    _prefix: ClassVar[str] = ""
    _secret_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable holding *field_name*, e.g. ``DGRAPH_API_KEY``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def from_mapping(cls: type[S], data: Mapping[str, Any]) -> S:
        """Build from a mapping of field names, rejecting unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise ConfigError(
                f"Unknown settings for {cls.__name__}: {', '.join(unknown)}",
                detail={"unknown": unknown},
            )
        return cls(**data)

    def __repr__(self) -> str:
        parts = []
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            parts.append(f"{f.name}={'***' if f.name in self._secret_fields and value else repr(value)}")
        return f"{type(self).__name__}({', '.join(parts)})"


__all__ = ["Settings"]
