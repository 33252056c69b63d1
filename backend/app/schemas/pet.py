from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.pet import EquipmentSlot, ItemType, PetStat


class PetItemRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    type: ItemType
    cost: int
    stat_effect: Optional[PetStat] = None
    effect_value: Optional[int] = None
    equipment_slot: Optional[EquipmentSlot] = None
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class InventoryItemRead(BaseModel):
    """One inventory row: the stack id, the catalog item and how many are held."""

    id: int
    item: PetItemRead
    quantity: int


class EquippedItemRead(BaseModel):
    slot: EquipmentSlot
    item: PetItemRead
    equipped_at: datetime


class PetRead(BaseModel):
    id: int
    name: str
    hunger: int
    happiness: int
    equipped: List[EquippedItemRead] = Field(default_factory=list)


class InventoryActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    user_pet_item_id: int = Field(alias="userPetItemId")


class InventoryActionResult(BaseModel):
    message: str
    pet: PetRead


class PurchaseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    item_id: int = Field(alias="itemId")
    quantity: int = Field(default=1, ge=1)


class PurchaseResult(BaseModel):
    inventory_item: InventoryItemRead
    gold: int
