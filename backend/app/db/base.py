"""Import all models for Alembic or metadata creation."""

from app.models.challenge import Challenge, UserChallenge
from app.models.group import Group, GroupMessage, UserGroup
from app.models.pet import EquippedItem, Pet, PetItem, UserPetItem
from app.models.task import Daily, DailyLog, Habit, HabitLog, Reward, Todo
from app.models.user import User

__all__ = [
    "User",
    "Pet",
    "PetItem",
    "UserPetItem",
    "EquippedItem",
    "Habit",
    "Daily",
    "Todo",
    "Reward",
    "HabitLog",
    "DailyLog",
    "Group",
    "UserGroup",
    "GroupMessage",
    "Challenge",
    "UserChallenge",
]
