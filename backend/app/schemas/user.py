from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=8)


class UserRead(BaseModel):
    id: int
    email: EmailStr
    username: str
    gold: int
    gems: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
