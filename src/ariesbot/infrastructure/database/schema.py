"""SQLAlchemy Core table definitions for the ariesbot database.

One relation: ``users``. The primary key is the only uniqueness
guarantee the registry relies on; concurrent inserts of one id are
serialized by it.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, MetaData, Table, Text

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
)
