"""
Output directory housekeeping for generated code.

Removes previously generated files before a run, keeping any file whose path
contains one of the configured keep substrings (``config.json`` by default),
and writes generated files, creating parent directories as needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Counts of what a cleanup removed."""

    files_removed: int = 0
    folders_removed: int = 0

    def __add__(self, other: CleanupResult) -> CleanupResult:
        return CleanupResult(
            self.files_removed + other.files_removed,
            self.folders_removed + other.folders_removed,
        )


def should_keep(path: Path, files_to_keep: Iterable[str]) -> bool:
    """Check whether any keep substring occurs in ``path``."""
    text = str(path)
    return any(match in text for match in files_to_keep)


def delete_all_files(directory: Path, files_to_keep: Iterable[str] = ()) -> CleanupResult:
    """Delete generated files under ``directory``, then any emptied folders.

    The directory itself is removed too when nothing is left in it. A
    missing directory is not an error.
    """
    keep = tuple(files_to_keep)
    result = CleanupResult()
    if not directory.is_dir():
        return result

    for path in sorted(directory.iterdir()):
        if path.is_dir() and not path.is_symlink():
            result += delete_all_files(path, keep)
        elif not should_keep(path, keep):
            path.unlink()
            result += CleanupResult(files_removed=1)

    if not any(directory.iterdir()):
        directory.rmdir()
        result += CleanupResult(folders_removed=1)
    return result


def write_to_file(path: Path, content: str) -> None:
    """Write ``content`` to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
