"""
Visit Entity

An opaque marker row. Each successful append creates one; rows are never
updated or deleted, so the row count only grows.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Visit(SQLModel, table=True):
    __tablename__ = "visits"

    # Assigned by the store on insert
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=utc_now),
    )
