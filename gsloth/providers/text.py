"""Passes the given text through unchanged."""

from __future__ import annotations

from typing import Any

from gsloth.providers.base import ContentProvider


class TextProvider(ContentProvider):
    name = "text"

    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        return item_id or None
