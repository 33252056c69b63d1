from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.group import UserGroupRole


class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class GroupRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    role: UserGroupRole
    created_at: datetime


class GroupMessageCreate(BaseModel):
    content: str


class GroupMessageRead(BaseModel):
    id: int
    group_id: int
    user_id: int
    username: str
    content: str
    created_at: datetime
