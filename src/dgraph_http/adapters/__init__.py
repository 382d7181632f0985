"""Adapters – concrete I/O implementations (HTTP transport)."""
