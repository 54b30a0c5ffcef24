"""Ownership predicate shared by every mutating operation."""

from typing import Protocol
from uuid import UUID


class Owned(Protocol):
    """Anything permanently attached to the user who created it."""

    user_id: UUID


def is_owner(record: Owned, caller_id: UUID) -> bool:
    """Check if the caller is the record's owner/author."""
    return record.user_id == caller_id
