from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Integer
from sqlmodel import Field, SQLModel


class Challenge(SQLModel, table=True):
    __tablename__ = "challenges"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True, nullable=False)
    description: Optional[str] = Field(default=None)
    goal: Optional[str] = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class UserChallenge(SQLModel, table=True):
    __tablename__ = "user_challenges"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    challenge_id: int = Field(foreign_key="challenges.id", primary_key=True)
    progress: int = Field(default=0, sa_column=Column(Integer, nullable=False, server_default="0"))
    joined_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
