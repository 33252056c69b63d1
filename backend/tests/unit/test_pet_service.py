"""
Unit tests for pet service functions.

Tests the business logic in app.services.pets including:
- Using consumables (stat change, clamping, stack decrement and removal)
- Equipping customization items (one item per slot)
- Rejecting the wrong item type for each action
"""

import pytest
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import PetMessages
from app.models.pet import EquipmentSlot, EquippedItem, ItemType, PetStat, UserPetItem
from app.services import pets as pets_service
from app.testing import create_item, create_user, grant_item


async def _hat(session: AsyncSession, name: str = "Top Hat"):
    return await create_item(
        session,
        name=name,
        type=ItemType.customization,
        equipment_slot=EquipmentSlot.hat,
        cost=100,
    )


@pytest.mark.unit
@pytest.mark.service
async def test_new_user_owns_a_pet(session: AsyncSession):
    user = await create_user(session, username="alice")
    pet = await pets_service.get_pet_for_user(session, user.id)

    assert pet.name == "alice's Pet"
    assert (pet.hunger, pet.happiness) == (50, 50)


@pytest.mark.unit
@pytest.mark.service
async def test_use_item_applies_effect_and_decrements(session: AsyncSession):
    user = await create_user(session)
    candy = await create_item(
        session,
        name="Candy",
        type=ItemType.treat,
        stat_effect=PetStat.happiness,
        effect_value=20,
    )
    row = await grant_item(session, user, candy, quantity=2)

    pet = await pets_service.use_item(session, user_id=user.id, user_pet_item_id=row.id)

    assert pet.happiness == 70
    assert pet.hunger == 50
    assert row.quantity == 1


@pytest.mark.unit
@pytest.mark.service
async def test_use_last_item_removes_inventory_row(session: AsyncSession):
    user = await create_user(session)
    apple = await create_item(session, name="Apple")
    row = await grant_item(session, user, apple, quantity=1)
    row_id = row.id

    await pets_service.use_item(session, user_id=user.id, user_pet_item_id=row_id)
    await session.commit()

    assert await session.get(UserPetItem, row_id) is None
    assert await pets_service.list_inventory(session, user.id) == []


@pytest.mark.unit
@pytest.mark.service
async def test_use_item_clamps_stat_at_maximum(session: AsyncSession):
    user = await create_user(session)
    steak = await create_item(session, name="Steak", effect_value=30)
    row = await grant_item(session, user, steak, quantity=3)

    for _ in range(3):
        pet = await pets_service.use_item(session, user_id=user.id, user_pet_item_id=row.id)

    assert pet.hunger == 100


@pytest.mark.unit
@pytest.mark.service
async def test_use_customization_item_is_rejected(session: AsyncSession):
    user = await create_user(session)
    row = await grant_item(session, user, await _hat(session))

    with pytest.raises(pets_service.PetActionError, match=PetMessages.CANNOT_USE_CUSTOMIZATION):
        await pets_service.use_item(session, user_id=user.id, user_pet_item_id=row.id)
    assert row.quantity == 1


@pytest.mark.unit
@pytest.mark.service
async def test_cannot_use_another_users_item(session: AsyncSession):
    owner = await create_user(session)
    other = await create_user(session)
    row = await grant_item(session, owner, await create_item(session))

    with pytest.raises(pets_service.InventoryItemNotFound):
        await pets_service.use_item(session, user_id=other.id, user_pet_item_id=row.id)


@pytest.mark.unit
@pytest.mark.service
async def test_equip_item_fills_slot_without_consuming(session: AsyncSession):
    user = await create_user(session)
    hat = await _hat(session)
    row = await grant_item(session, user, hat)

    equipped = await pets_service.equip_item(session, user_id=user.id, user_pet_item_id=row.id)

    assert equipped.slot == EquipmentSlot.hat
    assert equipped.pet_item_id == hat.id
    assert row.quantity == 1


@pytest.mark.unit
@pytest.mark.service
async def test_equip_replaces_item_in_same_slot(session: AsyncSession):
    user = await create_user(session)
    top_hat = await grant_item(session, user, await _hat(session, "Top Hat"))
    party_hat = await create_item(
        session,
        name="Party Hat",
        type=ItemType.customization,
        equipment_slot=EquipmentSlot.hat,
    )
    party_row = await grant_item(session, user, party_hat)

    await pets_service.equip_item(session, user_id=user.id, user_pet_item_id=top_hat.id)
    await pets_service.equip_item(session, user_id=user.id, user_pet_item_id=party_row.id)
    await session.commit()

    pet = await pets_service.get_pet_for_user(session, user.id)
    result = await session.exec(select(EquippedItem).where(EquippedItem.pet_id == pet.id))
    rows = result.all()
    assert len(rows) == 1
    assert rows[0].pet_item_id == party_hat.id


@pytest.mark.unit
@pytest.mark.service
async def test_equip_consumable_is_rejected(session: AsyncSession):
    user = await create_user(session)
    row = await grant_item(session, user, await create_item(session))

    with pytest.raises(pets_service.PetActionError, match=PetMessages.CANNOT_EQUIP_CONSUMABLE):
        await pets_service.equip_item(session, user_id=user.id, user_pet_item_id=row.id)


@pytest.mark.unit
@pytest.mark.service
async def test_grant_item_stacks_existing_row(session: AsyncSession):
    user = await create_user(session)
    apple = await create_item(session, name="Apple")

    first = await pets_service.grant_item(session, user_id=user.id, item_id=apple.id, quantity=2)
    second = await pets_service.grant_item(session, user_id=user.id, item_id=apple.id, quantity=3)

    assert first.id == second.id
    assert second.quantity == 5
