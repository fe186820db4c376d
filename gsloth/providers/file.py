"""Reads a file from the project directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gsloth.console import display, display_error
from gsloth.paths import project_root
from gsloth.providers.base import ContentProvider


class FileProvider(ContentProvider):
    name = "file"

    def __init__(self, project_dir: Path | None = None) -> None:
        self.project_dir = project_dir

    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        if not item_id:
            return None
        path = project_root(self.project_dir) / item_id
        display(f"Reading file {item_id}...")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            display_error(f"Error reading file at: {path}")
            display_error(str(e))
            return None
