from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime
from sqlalchemy.types import Text
from sqlmodel import Field, SQLModel


class WordRecord(SQLModel, table=True):
    __tablename__ = "words"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: str = Field(max_length=255, index=True)
    word: str = Field(max_length=255)
    meaning: str = Field(sa_column=Column(Text, nullable=False))
    usage_example: str = Field(sa_column=Column(Text, nullable=False))
    pronunciation: Optional[str] = Field(default=None, max_length=255)
    difficulty: Optional[str] = Field(default=None, max_length=32)
    category: Optional[str] = Field(default=None, max_length=64)
    next_review_date: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    review_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
