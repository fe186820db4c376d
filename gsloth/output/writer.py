"""Writes model responses and session transcripts to disk."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from gsloth.console import display_error, display_info, display_success, display_warning
from gsloth.paths import get_gsloth_file_path, project_root
from gsloth.utils import file_safe_local_date, to_file_safe_string

if TYPE_CHECKING:
    from gsloth.config.models import GthConfig

logger = logging.getLogger(__name__)


def standard_file_name(source: str, now: datetime | None = None) -> str:
    """``<SOURCE>-<YYYY-MM-DD_HH-MM-SS>.md`` with the source made file-safe."""
    return f"{to_file_safe_string(source.upper())}-{file_safe_local_date(now)}.md"


def resolve_output_path(
    config: GthConfig, source: str, project_dir: Path | None = None
) -> Path | None:
    """Where the output of ``source`` goes, or None when writing is disabled.

    ``write_output_to_file`` may be a bool or a file name. A bare name lands
    where generated files go; anything with a directory part is relative to
    the project root.
    """
    target = config.write_output_to_file
    if target is False:
        return None
    if target is True or not str(target).strip():
        return get_gsloth_file_path(standard_file_name(source), project_dir)

    path = Path(str(target).strip())
    if path.is_absolute():
        return path
    if len(path.parts) == 1:
        return get_gsloth_file_path(path.name, project_dir)
    return project_root(project_dir) / path


class ReportWriter:
    """Persists a command's final text. Failures are reported, never raised."""

    def __init__(self, config: GthConfig, project_dir: Path | None = None) -> None:
        self.config = config
        self.project_dir = project_dir

    def write(self, source: str, content: str) -> Path | None:
        """Write ``content`` for ``source`` and return its path.

        Returns None when output is disabled or the write failed.
        """
        dest = resolve_output_path(self.config, source, self.project_dir)
        if dest is None:
            return None
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content, encoding="utf-8")
        except OSError as e:
            display_error(f"Failed to write answer to file: {dest}")
            display_error(str(e))
            return None
        logger.debug("wrote %s (%d bytes)", dest, len(content))
        display_success(f"\nThis report can be found in {dest}")
        return dest


def append_to_file(path: Path, content: str) -> bool:
    """Append to a transcript; errors are displayed and reported as False."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        display_error(f"Failed to append to file: {path}")
        display_error(str(e))
        return False
    return True


def write_file_if_not_exists(path: Path, content: str) -> bool:
    """Create ``path`` with ``content`` unless it already exists."""
    display_info(f"checking {path} existence")
    if path.exists():
        display_warning(f"{path} already exists")
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    display_success(f"Created {path}")
    return True
