"""Unique identifier generation for new groups."""

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """Produces globally unique string identifiers."""

    def new_id(self) -> str: ...


class UUID4Generator:
    """Random (version 4) UUIDs rendered as text."""

    def new_id(self) -> str:
        return str(uuid.uuid4())
