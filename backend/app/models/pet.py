from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, UniqueConstraint
from sqlmodel import Enum as SQLEnum, Field, SQLModel


class ItemType(str, Enum):
    food = "food"
    treat = "treat"
    toy = "toy"
    customization = "customization"


class PetStat(str, Enum):
    hunger = "hunger"
    happiness = "happiness"


class EquipmentSlot(str, Enum):
    hat = "hat"
    glasses = "glasses"
    background = "background"


CONSUMABLE_TYPES = frozenset({ItemType.food, ItemType.treat, ItemType.toy})


class Pet(SQLModel, table=True):
    __tablename__ = "pets"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, nullable=False)
    name: str = Field(nullable=False)
    hunger: int = Field(default=50, sa_column=Column(Integer, nullable=False, server_default="50"))
    happiness: int = Field(default=50, sa_column=Column(Integer, nullable=False, server_default="50"))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class PetItem(SQLModel, table=True):
    __tablename__ = "pet_items"
    __table_args__ = (CheckConstraint("cost >= 0", name="ck_pet_items_cost_non_negative"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, nullable=False)
    description: Optional[str] = Field(default=None)
    type: ItemType = Field(sa_column=Column(SQLEnum(ItemType, name="item_type"), nullable=False))
    cost: int = Field(default=0, nullable=False)
    stat_effect: Optional[PetStat] = Field(
        default=None,
        sa_column=Column(SQLEnum(PetStat, name="pet_stat"), nullable=True),
    )
    effect_value: Optional[int] = Field(default=None)
    equipment_slot: Optional[EquipmentSlot] = Field(
        default=None,
        sa_column=Column(SQLEnum(EquipmentSlot, name="equipment_slot"), nullable=True),
    )
    image_url: Optional[str] = Field(default=None, max_length=2048)


class UserPetItem(SQLModel, table=True):
    """A stack of one catalog item in a user's inventory."""

    __tablename__ = "user_pet_items"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_user_pet_items_quantity_non_negative"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    item_id: int = Field(foreign_key="pet_items.id", nullable=False)
    quantity: int = Field(default=1, nullable=False)
    acquired_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class EquippedItem(SQLModel, table=True):
    __tablename__ = "equipped_items"
    __table_args__ = (UniqueConstraint("pet_id", "slot", name="uq_equipped_items_pet_slot"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    pet_id: int = Field(foreign_key="pets.id", nullable=False)
    pet_item_id: int = Field(foreign_key="pet_items.id", nullable=False)
    slot: EquipmentSlot = Field(
        sa_column=Column(SQLEnum(EquipmentSlot, name="equipment_slot"), nullable=False)
    )
    equipped_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
