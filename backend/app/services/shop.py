from __future__ import annotations

import logging

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import ShopMessages
from app.models.pet import ItemType, PetItem, UserPetItem
from app.models.user import User
from app.services import pets as pets_service
from app.services.users import spend_gold

logger = logging.getLogger(__name__)


class ShopItemNotFound(Exception):
    def __init__(self, message: str = ShopMessages.ITEM_NOT_FOUND):
        super().__init__(message)


async def list_items(session: AsyncSession, item_type: ItemType | None = None) -> list[PetItem]:
    stmt = select(PetItem).order_by(PetItem.cost.asc(), PetItem.id.asc())
    if item_type is not None:
        stmt = stmt.where(PetItem.type == item_type)
    result = await session.exec(stmt)
    return list(result.all())


async def get_item(session: AsyncSession, item_id: int) -> PetItem:
    item = await session.get(PetItem, item_id)
    if item is None:
        raise ShopItemNotFound()
    return item


async def buy_item(
    session: AsyncSession,
    *,
    user: User,
    item_id: int,
    quantity: int = 1,
) -> tuple[UserPetItem, PetItem]:
    """Charge the user for ``quantity`` items and add them to the inventory.

    Raises InsufficientFundsError without touching the balance when the user
    cannot afford the whole purchase.
    """
    if quantity < 1:
        raise ValueError(ShopMessages.INVALID_QUANTITY)
    item = await get_item(session, item_id)
    spend_gold(user, item.cost * quantity)
    session.add(user)
    row = await pets_service.grant_item(session, user_id=user.id, item_id=item.id, quantity=quantity)
    logger.info("User %s bought %s x%s for %s gold", user.id, item.name, quantity, item.cost * quantity)
    return row, item
