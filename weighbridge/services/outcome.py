"""Result tags for insert-or-update operations."""
import enum


class UpsertOutcome(str, enum.Enum):
    """Whether an upsert inserted a new row or overwrote an existing one."""
    CREATED = 'created'
    UPDATED = 'updated'
