"""Content provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ContentProvider(ABC):
    """Fetches text for a review: a diff, a file, an issue description.

    ``get`` returns None to mean "nothing to add". Providers report their own
    failures and never raise past this boundary.
    """

    name: str = ""

    @abstractmethod
    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        ...
