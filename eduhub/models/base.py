"""
Base Model Module

This module provides a base class for all in-memory records with common fields:
- id: Primary key (auto-incrementing integer, unique per entity type)
- created_at: Timestamp set when the record is stored
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """
    Abstract base class for all stored entities.

    Attributes:
        id (int): Primary key assigned by the owning table
        created_at (datetime): Set once when the record is created

    Records are plain values: updates produce a new record that replaces
    the stored one, they never mutate it in place.
    """

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: int
    created_at: datetime

    def __repr__(self):
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(id={self.id})>"
