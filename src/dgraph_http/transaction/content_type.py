"""Transaction – Content-Type values understood by the Dgraph HTTP API."""
from __future__ import annotations

from enum import Enum


class ContentType(str, Enum):
    DQL = "application/dql"
    RDF = "application/rdf"
    JSON = "application/json"


__all__ = ["ContentType"]
