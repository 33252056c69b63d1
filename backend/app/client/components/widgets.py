from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Button:
    """A clickable label bound to a handler supplied by the owning component.

    ``click()`` returns whatever the handler returns, so async handlers give
    back an awaitable for the caller to await.
    """

    label: str
    on_click: Callable[[], Any]

    def click(self) -> Any:
        return self.on_click()
