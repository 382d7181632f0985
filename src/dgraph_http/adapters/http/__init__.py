"""HTTP adapter – async HTTP client wrapper used by the transaction handle."""
from dgraph_http.adapters.http.client import HttpClient, HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
