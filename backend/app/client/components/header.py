from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from app.client.components.widgets import Button

APP_TITLE = "Habit Pet"
PET_VIEW = "pet"

NAV_ITEMS: tuple[tuple[str, str], ...] = (
    ("habits", "Habits"),
    ("dailies", "Dailies"),
    ("todos", "To-Dos"),
    ("rewards", "Rewards"),
    ("groups", "Groups"),
    ("challenges", "Challenges"),
    (PET_VIEW, "Pet"),
)


class HasCurrency(Protocol):
    gold: int
    gems: int


@dataclass(frozen=True)
class CurrencyView:
    gold: int
    gems: int

    @property
    def labels(self) -> tuple[str, str]:
        return (f"Gold: {self.gold}", f"Gems: {self.gems}")


@dataclass(frozen=True)
class HeaderView:
    title: str
    currency: Optional[CurrencyView]
    buttons: tuple[Button, ...]

    def button(self, label: str) -> Button:
        for button in self.buttons:
            if button.label == label:
                return button
        raise KeyError(label)


def shows_currency(current_view: str) -> bool:
    """Currency counters are hidden on the pet screen only."""
    return current_view != PET_VIEW


class Header:
    """Navigation bar driven entirely by its inputs."""

    def __init__(
        self,
        user: HasCurrency,
        current_view: str,
        on_navigate: Callable[[str], None],
        on_logout: Callable[[], None],
    ) -> None:
        self.user = user
        self.current_view = current_view
        self.on_navigate = on_navigate
        self.on_logout = on_logout

    def _nav_button(self, view: str, label: str) -> Button:
        return Button(label=label, on_click=lambda: self.on_navigate(view))

    def render(self) -> HeaderView:
        currency = None
        if shows_currency(self.current_view):
            currency = CurrencyView(gold=self.user.gold, gems=self.user.gems)
        buttons = tuple(self._nav_button(view, label) for view, label in NAV_ITEMS)
        buttons += (Button(label="Logout", on_click=self.on_logout),)
        return HeaderView(title=APP_TITLE, currency=currency, buttons=buttons)
