"""Seed the database with the game catalog and two example players.

Usage (from the backend/ directory):
    python -m app.db.seed

Every step is find-or-create, so running the seeder again leaves the
existing rows alone and adds nothing twice.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
import logging
import sys
from typing import Any

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.session import AsyncSessionLocal, engine
from app.models.challenge import Challenge, UserChallenge
from app.models.group import Group, GroupMessage, UserGroupRole
from app.models.pet import EquipmentSlot, EquippedItem, ItemType, PetItem, PetStat, UserPetItem
from app.models.task import Daily, DailyLog, Difficulty, Habit, HabitLog, Reward, Todo
from app.models.user import User
from app.services import challenges as challenges_service
from app.services import groups as groups_service
from app.services import pets as pets_service
from app.services import users as users_service

logger = logging.getLogger(__name__)

SEED_PASSWORD = "Password123!"
STARTING_GOLD = 500
STARTING_GEMS = 10

PET_ITEMS: list[dict[str, Any]] = [
    {
        "name": "Apple",
        "description": "A crunchy, healthy fruit.",
        "type": ItemType.food,
        "cost": 5,
        "stat_effect": PetStat.hunger,
        "effect_value": 10,
        "image_url": "https://placehold.co/100x100/FF6347/FFFFFF.png?text=Apple",
    },
    {
        "name": "Steak",
        "description": "A hearty meal for a hungry pet.",
        "type": ItemType.food,
        "cost": 15,
        "stat_effect": PetStat.hunger,
        "effect_value": 30,
        "image_url": "https://placehold.co/100x100/8B4513/FFFFFF.png?text=Steak",
    },
    {
        "name": "Candy",
        "description": "A sugary treat that boosts happiness.",
        "type": ItemType.treat,
        "cost": 10,
        "stat_effect": PetStat.happiness,
        "effect_value": 20,
        "image_url": "https://placehold.co/100x100/FFC0CB/000000.png?text=Candy",
    },
    {
        "name": "Top Hat",
        "description": "A very fancy top hat.",
        "type": ItemType.customization,
        "cost": 100,
        "equipment_slot": EquipmentSlot.hat,
        "image_url": "https://placehold.co/100x100/363636/FFFFFF.png?text=Hat",
    },
    {
        "name": "Sunglasses",
        "description": "Cool shades for a cool pet.",
        "type": ItemType.customization,
        "cost": 75,
        "equipment_slot": EquipmentSlot.glasses,
        "image_url": "https://placehold.co/100x100/4169E1/FFFFFF.png?text=Glasses",
    },
    {
        "name": "Default Room",
        "description": "A simple, clean room for your pet.",
        "type": ItemType.customization,
        "cost": 0,
        "equipment_slot": EquipmentSlot.background,
        "image_url": "https://placehold.co/800x600/3a3a3a/3a3a3a.png",
    },
    {
        "name": "Sunny Meadow",
        "description": "A beautiful, sunny field for your pet to enjoy.",
        "type": ItemType.customization,
        "cost": 200,
        "equipment_slot": EquipmentSlot.background,
        "image_url": "https://placehold.co/800x600/87CEEB/90EE90.png",
    },
    {
        "name": "Starry Night",
        "description": "A peaceful night sky full of twinkling stars.",
        "type": ItemType.customization,
        "cost": 250,
        "equipment_slot": EquipmentSlot.background,
        "image_url": "https://placehold.co/800x600/00008B/FFD700.png",
    },
    {
        "name": "Cozy Library",
        "description": "A warm, quiet library with shelves of books.",
        "type": ItemType.customization,
        "cost": 300,
        "equipment_slot": EquipmentSlot.background,
        "image_url": "https://placehold.co/800x600/8B4513/D2B48C.png",
    },
]

CHALLENGES: list[dict[str, str]] = [
    {
        "title": "30-Day Fitness Challenge",
        "description": "Work out every day for 30 days.",
        "goal": "Log 30 fitness activities.",
    },
    {
        "title": "Mindful Mornings",
        "description": "Start your day with meditation.",
        "goal": "Meditate for 15 days this month.",
    },
]


@dataclass
class UserTasks:
    habits: list[dict[str, Any]] = field(default_factory=list)
    dailies: list[dict[str, Any]] = field(default_factory=list)
    todos: list[dict[str, Any]] = field(default_factory=list)
    rewards: list[dict[str, Any]] = field(default_factory=list)


ALICE_TASKS = UserTasks(
    habits=[
        {"title": "Exercise for 30 minutes", "difficulty": Difficulty.medium},
        {"title": "Read a book chapter", "difficulty": Difficulty.easy},
    ],
    dailies=[{"title": "Morning Meditation", "difficulty": Difficulty.easy}],
    todos=[{"title": "Buy groceries"}],
    rewards=[{"title": "Watch a movie", "cost": 50}],
)


# ---------------------------------------------------------------------------
# Seeder steps
# ---------------------------------------------------------------------------

async def seed_pet_items(session: AsyncSession) -> list[PetItem]:
    """Upsert the catalog by item name; existing rows are left unchanged."""
    for data in PET_ITEMS:
        result = await session.exec(select(PetItem).where(PetItem.name == data["name"]))
        if result.one_or_none() is None:
            session.add(PetItem(**data))
    await session.flush()
    result = await session.exec(select(PetItem).order_by(PetItem.id.asc()))
    return list(result.all())


async def seed_challenges(session: AsyncSession) -> list[Challenge]:
    for data in CHALLENGES:
        if await challenges_service.get_challenge_by_title(session, data["title"]) is None:
            session.add(Challenge(**data))
    await session.flush()
    result = await session.exec(select(Challenge).order_by(Challenge.id.asc()))
    return list(result.all())


async def seed_user(
    session: AsyncSession,
    email: str,
    username: str,
    password: str,
    tasks: UserTasks,
) -> User:
    """Upsert a player by email; a new player gets a pet, currency and tasks."""
    existing = await users_service.get_user_by_email(session, email)
    if existing:
        return existing

    user = await users_service.create_user(
        session,
        email=email,
        username=username,
        password=password,
        gold=STARTING_GOLD,
        gems=STARTING_GEMS,
    )
    for model, rows in (
        (Habit, tasks.habits),
        (Daily, tasks.dailies),
        (Todo, tasks.todos),
        (Reward, tasks.rewards),
    ):
        for row in rows:
            session.add(model(user_id=user.id, **row))
    await session.flush()
    return user


async def _find_by_title(session: AsyncSession, model, user_id: int, title: str):
    result = await session.exec(select(model).where(model.user_id == user_id, model.title == title))
    return result.first()


async def seed_logs(session: AsyncSession, user_id: int, habit_title: str, daily_title: str) -> None:
    """Back-dated completion history; skipped once the habit has any logs."""
    habit = await _find_by_title(session, Habit, user_id, habit_title)
    daily = await _find_by_title(session, Daily, user_id, daily_title)
    if habit is None or daily is None:
        logger.warning("Skipping logs for user %s: habit or daily missing", user_id)
        return

    existing = await session.exec(select(HabitLog.id).where(HabitLog.habit_id == habit.id))
    if existing.first() is not None:
        return

    now = datetime.now(timezone.utc)
    session.add(HabitLog(user_id=user_id, habit_id=habit.id, completed=True, date=now - timedelta(days=2)))
    session.add(HabitLog(user_id=user_id, habit_id=habit.id, completed=True, date=now - timedelta(days=1)))
    session.add(
        DailyLog(
            user_id=user_id,
            daily_id=daily.id,
            date=now - timedelta(days=1),
            notes="A good session.",
        )
    )
    await session.flush()


async def give_item_to_user(session: AsyncSession, user_id: int, item_id: int, quantity: int = 1) -> UserPetItem:
    """Find-or-create the inventory row; an existing stack keeps its quantity."""
    result = await session.exec(
        select(UserPetItem).where(UserPetItem.user_id == user_id, UserPetItem.item_id == item_id)
    )
    row = result.first()
    if row:
        return row
    row = UserPetItem(user_id=user_id, item_id=item_id, quantity=quantity)
    session.add(row)
    await session.flush()
    return row


async def equip_item_on_pet(
    session: AsyncSession,
    pet_id: int,
    item: PetItem,
    slot: EquipmentSlot,
) -> EquippedItem:
    return await pets_service.equip_item_on_pet(session, pet_id=pet_id, item=item, slot=slot)


async def seed_group(session: AsyncSession, name: str, description: str, owner_id: int) -> Group:
    group = await groups_service.get_group_by_name(session, name)
    if group is None:
        group = Group(name=name, description=description)
        session.add(group)
        await session.flush()
    await groups_service.ensure_membership(
        session,
        group_id=group.id,
        user_id=owner_id,
        role=UserGroupRole.owner,
    )
    return group


async def join_group(session: AsyncSession, group_id: int, user_id: int) -> None:
    await groups_service.ensure_membership(session, group_id=group_id, user_id=user_id)


async def seed_group_messages(session: AsyncSession, group_id: int, messages: list[dict[str, Any]]) -> None:
    existing = await session.exec(select(GroupMessage.id).where(GroupMessage.group_id == group_id))
    if existing.first() is not None:
        return
    for message in messages:
        session.add(GroupMessage(group_id=group_id, **message))
    await session.flush()


async def join_challenge(session: AsyncSession, challenge_id: int, user_id: int) -> UserChallenge:
    return await challenges_service.join_challenge(session, challenge_id=challenge_id, user_id=user_id)


def _find_item(items: list[PetItem], name: str) -> PetItem | None:
    item = next((item for item in items if item.name == name), None)
    if item is None:
        logger.warning("Catalog item %r not found; skipping the steps that need it", name)
    return item


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

async def seed(session: AsyncSession) -> None:
    print("Starting the seeding process...")

    print("  Seeding pet items...")
    items = await seed_pet_items(session)

    print("  Seeding public challenges...")
    challenges = await seed_challenges(session)

    print("  Seeding user: alice")
    alice = await seed_user(session, "alice@example.com", "alice", SEED_PASSWORD, ALICE_TASKS)

    print("  Seeding user: bob")
    bob = await seed_user(session, "bob@example.com", "bob", SEED_PASSWORD, UserTasks())

    print("  Seeding historical logs for alice...")
    await seed_logs(session, alice.id, "Exercise for 30 minutes", "Morning Meditation")

    print("  Seeding inventory for alice...")
    apple = _find_item(items, "Apple")
    top_hat = _find_item(items, "Top Hat")
    if apple:
        await give_item_to_user(session, alice.id, apple.id, 3)
    if top_hat:
        await give_item_to_user(session, alice.id, top_hat.id, 1)

    print("  Equipping Top Hat on alice's pet...")
    if top_hat:
        alice_pet = await pets_service.get_pet_for_user(session, alice.id)
        await equip_item_on_pet(session, alice_pet.id, top_hat, EquipmentSlot.hat)

    print("  Seeding groups and memberships...")
    group = await seed_group(
        session,
        "The Procrastinators",
        "A group for getting things done... eventually.",
        alice.id,
    )
    await join_group(session, group.id, bob.id)

    print("  Seeding group messages...")
    await seed_group_messages(
        session,
        group.id,
        [
            {"user_id": alice.id, "content": "Hey everyone, welcome to the group!"},
            {"user_id": bob.id, "content": "Glad to be here!"},
        ],
    )

    print("  Seeding challenge participations...")
    await join_challenge(session, challenges[0].id, alice.id)
    await join_challenge(session, challenges[1].id, bob.id)

    await session.commit()
    print("Seeding finished successfully!")


async def main() -> None:
    try:
        async with AsyncSessionLocal() as session:
            await seed(session)
    finally:
        await engine.dispose()


def run() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("An error occurred during seeding")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run())
