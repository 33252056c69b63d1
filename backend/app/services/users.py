from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import AuthMessages, ShopMessages
from app.core.security import get_password_hash, verify_password
from app.models.pet import Pet
from app.models.user import User


class UserConflictError(Exception):
    """Raised when an email or username is already registered."""


class InsufficientFundsError(Exception):
    """Raised when a purchase would drive a user's gold below zero."""

    def __init__(self, message: str = ShopMessages.NOT_ENOUGH_GOLD):
        super().__init__(message)


def default_pet_name(username: str) -> str:
    return f"{username}'s Pet"


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    stmt = select(User).where(func.lower(User.email) == email.strip().lower())
    result = await session.exec(stmt)
    return result.one_or_none()


async def get_user_by_login(session: AsyncSession, login: str) -> User | None:
    """Look a user up by email or username."""
    cleaned = login.strip()
    stmt = select(User).where(
        or_(func.lower(User.email) == cleaned.lower(), User.username == cleaned)
    )
    result = await session.exec(stmt)
    return result.first()


async def authenticate(session: AsyncSession, login: str, password: str) -> User | None:
    user = await get_user_by_login(session, login)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def create_user(
    session: AsyncSession,
    *,
    email: str,
    username: str,
    password: str,
    gold: int = 0,
    gems: int = 0,
) -> User:
    """Create a user together with the pet every user owns."""
    normalized_email = email.strip().lower()
    if await get_user_by_email(session, normalized_email):
        raise UserConflictError(AuthMessages.EMAIL_TAKEN)
    existing = await session.exec(select(User.id).where(User.username == username))
    if existing.first() is not None:
        raise UserConflictError(AuthMessages.USERNAME_TAKEN)

    user = User(
        email=normalized_email,
        username=username,
        hashed_password=get_password_hash(password),
        gold=gold,
        gems=gems,
    )
    session.add(user)
    await session.flush()

    session.add(Pet(user_id=user.id, name=default_pet_name(username)))
    await session.flush()
    return user


def spend_gold(user: User, amount: int) -> None:
    if amount < 0:
        raise ValueError("amount must be non-negative")
    if user.gold < amount:
        raise InsufficientFundsError()
    user.gold -= amount
    user.updated_at = datetime.now(timezone.utc)


def award_gold(user: User, amount: int) -> None:
    if amount < 0:
        raise ValueError("amount must be non-negative")
    user.gold += amount
    user.updated_at = datetime.now(timezone.utc)
