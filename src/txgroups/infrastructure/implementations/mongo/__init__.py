"""MongoDB infrastructure implementations package."""

from txgroups.infrastructure.implementations.mongo.documents import GroupDocument
from txgroups.infrastructure.implementations.mongo.group_repository import (
    TRANSACTION_OPTIONS,
    MongoGroupRepository,
)

__all__ = [
    "TRANSACTION_OPTIONS",
    "GroupDocument",
    "MongoGroupRepository",
]
