"""
Test data factories for creating database models.

This module provides factory functions for creating test instances of database models
with sensible defaults. Each factory function can accept overrides for any field.
"""

from typing import Any
from uuid import uuid4

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.security import create_access_token
from app.models.group import Group, UserGroupRole
from app.models.pet import EquipmentSlot, ItemType, PetItem, PetStat, UserPetItem
from app.models.user import User
from app.services import groups as groups_service
from app.services import users as users_service

DEFAULT_PASSWORD = "testpassword123"


def _unique_suffix() -> str:
    return uuid4().hex[:12]


async def create_user(
    session: AsyncSession,
    commit: bool = True,
    **overrides: Any,
) -> User:
    """
    Create a test user (and the pet every user owns) with sensible defaults.

    Args:
        session: Database session
        commit: Whether to commit the transaction (default True)
        **overrides: email, username, password, gold or gems

    Returns:
        Created User instance

    Example:
        user = await create_user(session, username="alice", gold=100)
    """
    suffix = _unique_suffix()
    user = await users_service.create_user(
        session,
        email=overrides.pop("email", f"user-{suffix}@example.com"),
        username=overrides.pop("username", f"user{suffix}"),
        password=overrides.pop("password", DEFAULT_PASSWORD),
        gold=overrides.pop("gold", 0),
        gems=overrides.pop("gems", 0),
    )
    for key, value in overrides.items():
        setattr(user, key, value)
    session.add(user)

    if commit:
        await session.commit()
        await session.refresh(user)

    return user


async def create_item(
    session: AsyncSession,
    commit: bool = True,
    **overrides: Any,
) -> PetItem:
    """
    Create a catalog item. Defaults to a food item that restores hunger.

    Example:
        hat = await create_item(
            session,
            type=ItemType.customization,
            equipment_slot=EquipmentSlot.hat,
        )
    """
    defaults = {
        "name": f"Test Item {_unique_suffix()}",
        "description": "A test item",
        "type": ItemType.food,
        "cost": 5,
        "stat_effect": PetStat.hunger,
        "effect_value": 10,
    }
    item_data = {**defaults, **overrides}
    if item_data["type"] == ItemType.customization:
        item_data.setdefault("equipment_slot", EquipmentSlot.hat)
        if "stat_effect" not in overrides:
            item_data["stat_effect"] = None
        if "effect_value" not in overrides:
            item_data["effect_value"] = None

    item = PetItem(**item_data)
    session.add(item)

    if commit:
        await session.commit()
        await session.refresh(item)

    return item


async def grant_item(
    session: AsyncSession,
    user: User,
    item: PetItem,
    quantity: int = 1,
    commit: bool = True,
) -> UserPetItem:
    """Put ``quantity`` of ``item`` into the user's inventory as a new row."""
    row = UserPetItem(user_id=user.id, item_id=item.id, quantity=quantity)
    session.add(row)

    if commit:
        await session.commit()
        await session.refresh(row)

    return row


async def create_group(
    session: AsyncSession,
    owner: User | None = None,
    commit: bool = True,
    **overrides: Any,
) -> Group:
    """
    Create a test group owned by ``owner`` (created if not provided).

    Example:
        group = await create_group(session, owner=alice, name="Early Birds")
    """
    if owner is None:
        owner = await create_user(session, commit=commit)

    defaults = {
        "name": f"Test Group {_unique_suffix()}",
        "description": "A test group",
    }
    group_data = {**defaults, **overrides}
    group = Group(**group_data)
    session.add(group)
    await session.flush()
    await groups_service.ensure_membership(
        session,
        group_id=group.id,
        user_id=owner.id,
        role=UserGroupRole.owner,
    )

    if commit:
        await session.commit()
        await session.refresh(group)

    return group


def get_auth_token(user: User) -> str:
    """
    Generate a valid JWT access token for a user.

    Example:
        token = get_auth_token(test_user)
        headers = {"Authorization": f"Bearer {token}"}
        response = await client.get("/api/v1/users/me", headers=headers)
    """
    return create_access_token(subject=str(user.id))


def get_auth_headers(user: User) -> dict[str, str]:
    """Authorization headers for API requests made as ``user``."""
    token = get_auth_token(user)
    return {"Authorization": f"Bearer {token}"}
