from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ChallengeRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    goal: Optional[str] = None
    joined: bool = False
    progress: Optional[int] = None
    created_at: datetime
