"""
Column types and timestamp columns shared by the catalog models.
"""

from sqlalchemy import Column, JSON, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")
JSONDict = JSON().with_variant(JSONB(), "postgresql")


def created_at_column():
    return Column(
        TIMESTAMP(timezone=False),
        server_default=func.now(),
        nullable=False
    )


def updated_at_column():
    return Column(
        TIMESTAMP(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
