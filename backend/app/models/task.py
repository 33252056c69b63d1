from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, Text
from sqlmodel import Enum as SQLEnum, Field, SQLModel


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    __tablename__ = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    difficulty: Difficulty = Field(
        default=Difficulty.easy,
        sa_column=Column(
            SQLEnum(Difficulty, name="difficulty"),
            nullable=False,
            server_default=Difficulty.easy.value,
        ),
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class Daily(SQLModel, table=True):
    __tablename__ = "dailies"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    difficulty: Difficulty = Field(
        default=Difficulty.easy,
        sa_column=Column(
            SQLEnum(Difficulty, name="difficulty"),
            nullable=False,
            server_default=Difficulty.easy.value,
        ),
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class Todo(SQLModel, table=True):
    __tablename__ = "todos"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    completed: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false"),
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class Reward(SQLModel, table=True):
    __tablename__ = "rewards"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    cost: int = Field(default=0, nullable=False)
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class HabitLog(SQLModel, table=True):
    __tablename__ = "habit_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False)
    habit_id: int = Field(foreign_key="habits.id", index=True, nullable=False)
    completed: bool = Field(default=True)
    date: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class DailyLog(SQLModel, table=True):
    __tablename__ = "daily_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False)
    daily_id: int = Field(foreign_key="dailies.id", index=True, nullable=False)
    date: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
