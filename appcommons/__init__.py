"""Keyset pagination and transactional write helpers for asyncpg services."""

__version__ = "0.1.0"
