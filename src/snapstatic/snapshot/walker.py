"""Directory walker — enumerate servable files and directories under a root.

Each directory level is listed, its entries are classified concurrently
(one ``lstat`` per entry), and subdirectories are walked in their own
tasks. Levels join before returning, so the result is a flat list that
is complete or not produced at all.

Classification:

- name starts with ``.`` -> skipped with its whole subtree
- directory -> ``DirectoryCandidate`` (then recursed into)
- file whose extension is a key of the type table -> ``FileCandidate``
- anything else -> dropped
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from stat import S_ISDIR
from typing import TypeAlias

import anyio

from snapstatic.file_types import FileType


@dataclass(frozen=True, slots=True)
class DirectoryCandidate:
    """A directory; becomes a redirect entry."""

    path: Path


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """A recognized file; becomes a content entry."""

    path: Path
    file_type: FileType


Candidate: TypeAlias = DirectoryCandidate | FileCandidate


def extension_of(name: str) -> str:
    """Text after the last dot, or ``""`` when the name has none."""
    stem, dot, extension = name.rpartition(".")
    return extension if dot and stem else ""


async def walk(root: str | Path, file_types: Mapping[str, FileType]) -> list[Candidate]:
    """Walk *root* and return every candidate, the root directory first.

    Raises ``OSError`` if any directory cannot be listed; no partial
    result is returned.
    """
    root_path = Path(root)
    candidates: list[Candidate] = [DirectoryCandidate(root_path)]
    candidates.extend(await _walk_directory(anyio.Path(root_path), file_types))
    return candidates


async def _walk_directory(
    directory: anyio.Path,
    file_types: Mapping[str, FileType],
) -> list[Candidate]:
    names = sorted([entry.name async for entry in directory.iterdir()])
    visible = [name for name in names if not name.startswith(".")]
    results: list[list[Candidate]] = [[] for _ in visible]

    async def classify(index: int, name: str) -> None:
        entry = directory / name
        info = await entry.lstat()
        if S_ISDIR(info.st_mode):
            results[index] = [
                DirectoryCandidate(Path(entry)),
                *await _walk_directory(entry, file_types),
            ]
            return
        file_type = file_types.get(extension_of(name))
        if file_type is not None:
            results[index] = [FileCandidate(Path(entry), file_type)]

    async with anyio.create_task_group() as tg:
        for index, name in enumerate(visible):
            tg.start_soon(classify, index, name)

    return [candidate for group in results for candidate in group]
