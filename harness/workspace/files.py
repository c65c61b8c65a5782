"""File-system helpers relative to the learner's project root."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from harness.core.config import get_settings
from harness.core.errors import InvalidInputError, ProjectFileError

logger = logging.getLogger(__name__)


def project_path(path: str | Path = "") -> Path:
    """Absolute path of ``path`` under the configured project root."""
    return get_settings().project_root / path


def get_directory(path: str | Path) -> list[str]:
    """Names of the entries in a project directory, sorted."""
    target = project_path(path)
    try:
        return sorted(entry.name for entry in target.iterdir())
    except FileNotFoundError as exc:
        raise ProjectFileError(f"Directory not found: {target}") from exc
    except NotADirectoryError as exc:
        raise ProjectFileError(f"Not a directory: {target}") from exc


def get_file(path: str | Path) -> str:
    target = project_path(path)
    try:
        return target.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ProjectFileError(f"File not found: {target}") from exc
    except IsADirectoryError as exc:
        raise ProjectFileError(f"Path is a directory: {target}") from exc


def file_exists(path: str | Path) -> bool:
    return project_path(path).exists()


def copy_directory(folder_to_copy: str | Path, destination_folder: str | Path) -> list[str]:
    """Copy every regular file of one project folder into another.

    The destination is created if missing. Sub-directories are skipped.
    Returns the copied file names.
    """
    source = project_path(folder_to_copy)
    destination = project_path(destination_folder)
    names = get_directory(folder_to_copy)
    destination.mkdir(exist_ok=True)

    copied = []
    for name in names:
        entry = source / name
        if not entry.is_file():
            logger.debug("Skipping non-file entry", extra={"path": str(entry)})
            continue
        shutil.copyfile(entry, destination / name)
        copied.append(name)
    return copied


def copy_project_files(
    project_folder_path: str | Path,
    tests_folder_path: str | Path,
    files: list[str] | None = None,
) -> None:
    """Copy the named files from the project folder into the tests folder."""
    if not files:
        raise InvalidInputError("Cannot copy project files: no files given")

    project_folder = project_path(project_folder_path)
    tests_folder = project_path(tests_folder_path)
    for name in files:
        try:
            shutil.copyfile(project_folder / name, tests_folder / name)
        except FileNotFoundError as exc:
            raise ProjectFileError(f"Cannot copy project file {name}: {exc}") from exc


def get_json_file(path: str | Path) -> Any:
    text = get_file(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectFileError(f"Invalid JSON in {path}: {exc}") from exc


def write_json_file(path: str | Path, content: Any) -> None:
    target = project_path(path)
    target.write_text(json.dumps(content, indent=2), encoding="utf-8")
