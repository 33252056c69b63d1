from __future__ import annotations

from datetime import datetime, timezone
import logging

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.messages import PetMessages
from app.models.pet import (
    CONSUMABLE_TYPES,
    EquipmentSlot,
    EquippedItem,
    ItemType,
    Pet,
    PetItem,
    PetStat,
    UserPetItem,
)

logger = logging.getLogger(__name__)


class PetNotFoundError(Exception):
    """Raised when a user has no pet."""

    def __init__(self, message: str = PetMessages.PET_NOT_FOUND):
        super().__init__(message)


class InventoryItemNotFound(Exception):
    """Raised when an inventory row does not exist or belongs to someone else."""

    def __init__(self, message: str = PetMessages.INVENTORY_ITEM_NOT_FOUND):
        super().__init__(message)


class PetActionError(Exception):
    """Raised when an item cannot be used or equipped."""


async def get_pet_for_user(session: AsyncSession, user_id: int) -> Pet:
    result = await session.exec(select(Pet).where(Pet.user_id == user_id))
    pet = result.one_or_none()
    if pet is None:
        raise PetNotFoundError()
    return pet


async def list_inventory(session: AsyncSession, user_id: int) -> list[tuple[UserPetItem, PetItem]]:
    stmt = (
        select(UserPetItem, PetItem)
        .join(PetItem, PetItem.id == UserPetItem.item_id)
        .where(UserPetItem.user_id == user_id, UserPetItem.quantity > 0)
        .order_by(UserPetItem.id.asc())
    )
    result = await session.exec(stmt)
    return list(result.all())


async def get_inventory_row(
    session: AsyncSession,
    *,
    user_id: int,
    user_pet_item_id: int,
) -> tuple[UserPetItem, PetItem]:
    stmt = (
        select(UserPetItem, PetItem)
        .join(PetItem, PetItem.id == UserPetItem.item_id)
        .where(UserPetItem.id == user_pet_item_id, UserPetItem.user_id == user_id)
    )
    result = await session.exec(stmt)
    row = result.one_or_none()
    if row is None:
        raise InventoryItemNotFound()
    return row


async def list_equipped(session: AsyncSession, pet_id: int) -> list[tuple[EquippedItem, PetItem]]:
    stmt = (
        select(EquippedItem, PetItem)
        .join(PetItem, PetItem.id == EquippedItem.pet_item_id)
        .where(EquippedItem.pet_id == pet_id)
        .order_by(EquippedItem.slot.asc())
    )
    result = await session.exec(stmt)
    return list(result.all())


def apply_stat_effect(pet: Pet, item: PetItem, *, max_value: int | None = None) -> int:
    """Raise the pet stat the item targets, clamped to the stat ceiling.

    Returns the amount the stat actually changed by.
    """
    if item.stat_effect is None or not item.effect_value:
        return 0
    ceiling = settings.PET_STAT_MAX if max_value is None else max_value
    attribute = PetStat(item.stat_effect).value
    current = getattr(pet, attribute)
    updated = max(0, min(ceiling, current + item.effect_value))
    setattr(pet, attribute, updated)
    return updated - current


async def grant_item(
    session: AsyncSession,
    *,
    user_id: int,
    item_id: int,
    quantity: int = 1,
) -> UserPetItem:
    """Add ``quantity`` of an item to the user's existing stack, or start one."""
    result = await session.exec(
        select(UserPetItem)
        .where(UserPetItem.user_id == user_id, UserPetItem.item_id == item_id)
        .order_by(UserPetItem.id.asc())
    )
    row = result.first()
    if row is None:
        row = UserPetItem(user_id=user_id, item_id=item_id, quantity=quantity)
    else:
        row.quantity += quantity
    session.add(row)
    await session.flush()
    return row


async def use_item(session: AsyncSession, *, user_id: int, user_pet_item_id: int) -> Pet:
    row, item = await get_inventory_row(session, user_id=user_id, user_pet_item_id=user_pet_item_id)
    if ItemType(item.type) not in CONSUMABLE_TYPES:
        raise PetActionError(PetMessages.CANNOT_USE_CUSTOMIZATION)
    if row.quantity <= 0:
        raise PetActionError(PetMessages.OUT_OF_STOCK)

    pet = await get_pet_for_user(session, user_id)
    delta = apply_stat_effect(pet, item)
    session.add(pet)

    row.quantity -= 1
    if row.quantity == 0:
        await session.delete(row)
    else:
        session.add(row)
    await session.flush()
    logger.info("User %s used %s on pet %s (%s %+d)", user_id, item.name, pet.id, item.stat_effect, delta)
    return pet


async def equip_item_on_pet(
    session: AsyncSession,
    *,
    pet_id: int,
    item: PetItem,
    slot: EquipmentSlot | None = None,
) -> EquippedItem:
    """Put ``item`` in the slot, replacing whatever the pet wore there."""
    target_slot = slot or item.equipment_slot
    if target_slot is None:
        raise PetActionError(PetMessages.MISSING_SLOT)

    result = await session.exec(
        select(EquippedItem).where(EquippedItem.pet_id == pet_id, EquippedItem.slot == target_slot)
    )
    equipped = result.one_or_none()
    if equipped is None:
        equipped = EquippedItem(pet_id=pet_id, pet_item_id=item.id, slot=target_slot)
    else:
        equipped.pet_item_id = item.id
        equipped.equipped_at = datetime.now(timezone.utc)
    session.add(equipped)
    await session.flush()
    return equipped


async def equip_item(session: AsyncSession, *, user_id: int, user_pet_item_id: int) -> EquippedItem:
    row, item = await get_inventory_row(session, user_id=user_id, user_pet_item_id=user_pet_item_id)
    if ItemType(item.type) != ItemType.customization:
        raise PetActionError(PetMessages.CANNOT_EQUIP_CONSUMABLE)
    if row.quantity <= 0:
        raise PetActionError(PetMessages.OUT_OF_STOCK)

    pet = await get_pet_for_user(session, user_id)
    equipped = await equip_item_on_pet(session, pet_id=pet.id, item=item)
    logger.info("User %s equipped %s in slot %s", user_id, item.name, equipped.slot)
    return equipped
