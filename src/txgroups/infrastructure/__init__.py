"""
Infrastructure abstraction layer for group storage.

This module provides the storage port (GroupRepository), the transaction
retry engine, the storage error translator and two implementations,
selected via factory pattern:
- local: in-memory store with emulated transactions
- mongo: MongoDB replica set with real transactions
"""

from txgroups.infrastructure.factory import InfrastructureFactory

__all__ = ["InfrastructureFactory"]
