"""Shared base for all SQLModel domain entities"""

from datetime import datetime, timezone
from sqlalchemy import BigInteger, DateTime, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER primary keys
IdType = BigInteger().with_variant(Integer(), "sqlite")

# Timestamps keep their UTC offset
TimestampType = DateTime(timezone=True)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Base class for table-backed domain entities"""
    pass
