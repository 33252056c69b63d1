from typing import Annotated, List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import CurrentUser, SessionDep
from app.api.v1.endpoints.pet import serialize_inventory_row
from app.models.pet import ItemType, PetItem
from app.schemas.pet import PetItemRead, PurchaseRequest, PurchaseResult
from app.services import shop as shop_service
from app.services.users import InsufficientFundsError

router = APIRouter()


@router.get("/items", response_model=List[PetItemRead])
async def list_items(
    session: SessionDep,
    _current_user: CurrentUser,
    item_type: Annotated[Optional[ItemType], Query(alias="type")] = None,
) -> List[PetItem]:
    return await shop_service.list_items(session, item_type=item_type)


@router.post("/buy", response_model=PurchaseResult)
async def buy_item(
    payload: PurchaseRequest,
    session: SessionDep,
    current_user: CurrentUser,
) -> PurchaseResult:
    try:
        row, item = await shop_service.buy_item(
            session,
            user=current_user,
            item_id=payload.item_id,
            quantity=payload.quantity,
        )
    except shop_service.ShopItemNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InsufficientFundsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await session.commit()
    return PurchaseResult(inventory_item=serialize_inventory_row(row, item), gold=current_user.gold)
