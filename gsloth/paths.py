"""Where gsloth reads settings from and writes artifacts to.

A project may keep everything under ``.gsloth/``; settings then live in
``.gsloth/.gsloth-settings/``. Without that directory the project root is used.
"""

from __future__ import annotations

from pathlib import Path

GSLOTH_DIR = ".gsloth"
GSLOTH_SETTINGS_DIR = ".gsloth-settings"


def project_root(project_dir: Path | None = None) -> Path:
    return project_dir if project_dir is not None else Path.cwd()


def gsloth_dir_exists(project_dir: Path | None = None) -> bool:
    return (project_root(project_dir) / GSLOTH_DIR).is_dir()


def get_gsloth_file_path(filename: str, project_dir: Path | None = None) -> Path:
    """Artifact location: ``.gsloth/<filename>`` if present, else the project root."""
    root = project_root(project_dir)
    if gsloth_dir_exists(root):
        return root / GSLOTH_DIR / filename
    return root / filename


def get_gsloth_config_write_path(filename: str, project_dir: Path | None = None) -> Path:
    root = project_root(project_dir)
    if gsloth_dir_exists(root):
        settings = root / GSLOTH_DIR / GSLOTH_SETTINGS_DIR
        settings.mkdir(parents=True, exist_ok=True)
        return settings / filename
    return root / filename


def get_gsloth_config_read_path(filename: str, project_dir: Path | None = None) -> Path:
    """Settings-dir copy wins when it exists; otherwise the project root copy."""
    root = project_root(project_dir)
    if gsloth_dir_exists(root):
        candidate = root / GSLOTH_DIR / GSLOTH_SETTINGS_DIR / filename
        if candidate.exists():
            return candidate
    return root / filename
