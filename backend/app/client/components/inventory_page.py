"""Inventory screen: lists owned items, filters them by type, uses or equips them."""

from __future__ import annotations

from dataclasses import dataclass, field
import inspect
import logging
from typing import Any, Callable, List, Optional, Union

from pydantic import ValidationError

from app.client.api import ApiClient, ApiError
from app.client.components.widgets import Button
from app.models.pet import ItemType
from app.schemas.pet import InventoryItemRead

logger = logging.getLogger(__name__)

FILTER_ALL = "ALL"
InventoryFilter = Union[ItemType, str]

FILTER_LABELS: tuple[tuple[InventoryFilter, str], ...] = (
    (FILTER_ALL, "All"),
    (ItemType.food, "Food"),
    (ItemType.treat, "Treats"),
    (ItemType.toy, "Toys"),
    (ItemType.customization, "Customization"),
)

FETCH_ERROR = "Failed to fetch inventory."
EMPTY_HINT = "No items of this type in your inventory. Visit the shop to get new items!"
USE_SUCCESS = "Item used successfully!"
USE_FALLBACK = "Could not use item."
EQUIP_SUCCESS = "Item equipped successfully!"
EQUIP_FALLBACK = "Could not equip item."


def filter_inventory(inventory: List[InventoryItemRead], active_filter: InventoryFilter) -> List[InventoryItemRead]:
    if active_filter == FILTER_ALL:
        return list(inventory)
    return [row for row in inventory if row.item.type == active_filter]


def action_for(row: InventoryItemRead) -> str:
    return "equip" if row.item.type == ItemType.customization else "use"


@dataclass(frozen=True)
class InventoryCard:
    id: int
    name: str
    quantity: int
    description: Optional[str]
    image_url: Optional[str]
    action: str
    button: Button

    @property
    def title(self) -> str:
        return f"{self.name} (x{self.quantity})"


@dataclass(frozen=True)
class InventoryView:
    status: str
    message: Optional[str] = None
    filters: tuple[Button, ...] = ()
    active_filter: InventoryFilter = FILTER_ALL
    cards: tuple[InventoryCard, ...] = field(default_factory=tuple)


async def _maybe_await(value: Any) -> None:
    if inspect.isawaitable(value):
        await value


class InventoryPage:
    """Stateful inventory component.

    ``on_pet_updated`` is called after every successful use or equip so the
    owner can reload the pet; handing in a different callback through
    ``update_props`` refetches the inventory. ``alert`` receives every
    user-facing outcome message.
    """

    def __init__(
        self,
        api: ApiClient,
        on_pet_updated: Callable[[], Any],
        alert: Callable[[str], Any] = print,
    ) -> None:
        self.api = api
        self.on_pet_updated = on_pet_updated
        self.alert = alert
        self.loading = True
        self.error: Optional[str] = None
        self.inventory: List[InventoryItemRead] = []
        self.active_filter: InventoryFilter = FILTER_ALL
        self._memo_key: Optional[tuple[List[InventoryItemRead], InventoryFilter]] = None
        self._memo_value: List[InventoryItemRead] = []

    async def mount(self) -> None:
        await self.fetch_inventory()

    async def update_props(self, on_pet_updated: Callable[[], Any]) -> None:
        if on_pet_updated == self.on_pet_updated:
            return
        self.on_pet_updated = on_pet_updated
        await self.fetch_inventory()

    async def fetch_inventory(self) -> None:
        self.loading = True
        self.error = None
        try:
            payload = await self.api.get("/pet/inventory")
            if payload is None:
                payload = []
            if not isinstance(payload, list):
                raise ApiError(f"GET /pet/inventory returned {type(payload).__name__}, expected a list")
            self.inventory = [InventoryItemRead.model_validate(row) for row in payload]
        except (ApiError, ValidationError) as exc:
            logger.warning("Inventory fetch failed: %s", exc)
            self.error = FETCH_ERROR
        finally:
            self.loading = False

    def set_filter(self, active_filter: InventoryFilter) -> None:
        if active_filter != FILTER_ALL:
            active_filter = ItemType(active_filter)
        self.active_filter = active_filter

    @property
    def filtered_inventory(self) -> List[InventoryItemRead]:
        key = self._memo_key
        if key is None or key[0] is not self.inventory or key[1] != self.active_filter:
            self._memo_value = filter_inventory(self.inventory, self.active_filter)
            self._memo_key = (self.inventory, self.active_filter)
        return self._memo_value

    async def _run_action(self, path: str, user_pet_item_id: int, success: str, fallback: str) -> bool:
        try:
            await self.api.post(path, json={"userPetItemId": user_pet_item_id})
        except ApiError as exc:
            await _maybe_await(self.alert(f"Error: {exc.server_message or fallback}"))
            return False
        await _maybe_await(self.alert(success))
        await _maybe_await(self.on_pet_updated())
        return True

    async def use_item(self, user_pet_item_id: int) -> bool:
        return await self._run_action("/pet/use", user_pet_item_id, USE_SUCCESS, USE_FALLBACK)

    async def equip_item(self, user_pet_item_id: int) -> bool:
        return await self._run_action("/pet/equip", user_pet_item_id, EQUIP_SUCCESS, EQUIP_FALLBACK)

    def _card(self, row: InventoryItemRead) -> InventoryCard:
        action = action_for(row)
        handler = self.equip_item if action == "equip" else self.use_item
        return InventoryCard(
            id=row.id,
            name=row.item.name,
            quantity=row.quantity,
            description=row.item.description,
            image_url=row.item.image_url,
            action=action,
            button=Button(label=action.capitalize(), on_click=lambda: handler(row.id)),
        )

    def render(self) -> InventoryView:
        if self.loading:
            return InventoryView(status="loading", message="Loading inventory...")
        if self.error:
            return InventoryView(status="error", message=self.error)

        filters = tuple(
            Button(label=label, on_click=lambda value=value: self.set_filter(value))
            for value, label in FILTER_LABELS
        )
        rows = self.filtered_inventory
        return InventoryView(
            status="ready",
            message=None if rows else EMPTY_HINT,
            filters=filters,
            active_filter=self.active_filter,
            cards=tuple(self._card(row) for row in rows),
        )
