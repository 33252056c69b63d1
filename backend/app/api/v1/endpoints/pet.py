from typing import List

from fastapi import APIRouter, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.api.deps import CurrentUser, SessionDep
from app.models.pet import EquippedItem, Pet, PetItem, UserPetItem
from app.schemas.pet import (
    EquippedItemRead,
    InventoryActionRequest,
    InventoryActionResult,
    InventoryItemRead,
    PetItemRead,
    PetRead,
)
from app.services import pets as pets_service

router = APIRouter()


def serialize_inventory_row(row: UserPetItem, item: PetItem) -> InventoryItemRead:
    return InventoryItemRead(
        id=row.id,
        item=PetItemRead.model_validate(item),
        quantity=row.quantity,
    )


def _serialize_equipped(equipped: EquippedItem, item: PetItem) -> EquippedItemRead:
    return EquippedItemRead(
        slot=equipped.slot,
        item=PetItemRead.model_validate(item),
        equipped_at=equipped.equipped_at,
    )


async def _serialize_pet(session: AsyncSession, pet: Pet) -> PetRead:
    equipped = await pets_service.list_equipped(session, pet.id)
    return PetRead(
        id=pet.id,
        name=pet.name,
        hunger=pet.hunger,
        happiness=pet.happiness,
        equipped=[_serialize_equipped(row, item) for row, item in equipped],
    )


async def _load_pet(session: AsyncSession, user_id: int) -> Pet:
    try:
        return await pets_service.get_pet_for_user(session, user_id)
    except pets_service.PetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("/", response_model=PetRead)
async def read_pet(session: SessionDep, current_user: CurrentUser) -> PetRead:
    pet = await _load_pet(session, current_user.id)
    return await _serialize_pet(session, pet)


@router.get("/inventory", response_model=List[InventoryItemRead])
async def list_inventory(session: SessionDep, current_user: CurrentUser) -> List[InventoryItemRead]:
    rows = await pets_service.list_inventory(session, current_user.id)
    return [serialize_inventory_row(row, item) for row, item in rows]


@router.post("/use", response_model=InventoryActionResult)
async def use_item(
    payload: InventoryActionRequest,
    session: SessionDep,
    current_user: CurrentUser,
) -> InventoryActionResult:
    try:
        pet = await pets_service.use_item(
            session,
            user_id=current_user.id,
            user_pet_item_id=payload.user_pet_item_id,
        )
    except (pets_service.InventoryItemNotFound, pets_service.PetNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except pets_service.PetActionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await session.commit()
    return InventoryActionResult(message="Item used successfully!", pet=await _serialize_pet(session, pet))


@router.post("/equip", response_model=InventoryActionResult)
async def equip_item(
    payload: InventoryActionRequest,
    session: SessionDep,
    current_user: CurrentUser,
) -> InventoryActionResult:
    try:
        await pets_service.equip_item(
            session,
            user_id=current_user.id,
            user_pet_item_id=payload.user_pet_item_id,
        )
    except (pets_service.InventoryItemNotFound, pets_service.PetNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except pets_service.PetActionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await session.commit()
    pet = await _load_pet(session, current_user.id)
    return InventoryActionResult(message="Item equipped successfully!", pet=await _serialize_pet(session, pet))
