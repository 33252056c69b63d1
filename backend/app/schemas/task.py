from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.task import Difficulty


class HabitBase(BaseModel):
    title: str = Field(min_length=1)
    notes: Optional[str] = None
    difficulty: Difficulty = Difficulty.easy


class HabitCreate(HabitBase):
    pass


class HabitRead(HabitBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


# Dailies share the habit shape; they differ only in how often they recur
DailyCreate = HabitCreate
DailyRead = HabitRead


class TodoCreate(BaseModel):
    title: str = Field(min_length=1)
    notes: Optional[str] = None


class TodoRead(TodoCreate):
    id: int
    completed: bool
    created_at: datetime

    class Config:
        from_attributes = True


class RewardCreate(BaseModel):
    title: str = Field(min_length=1)
    cost: int = Field(default=0, ge=0)


class RewardRead(RewardCreate):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class DailyCompleteRequest(BaseModel):
    notes: Optional[str] = None


class CompletionResult(BaseModel):
    gold_awarded: int
    gold: int


class RedeemResult(BaseModel):
    gold_spent: int
    gold: int
