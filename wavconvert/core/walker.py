"""Walk directories and find candidate WAVE files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from wavconvert.config.settings import WAV_EXTENSION
from wavconvert.errors import RootUnreadableError, SubdirectoryUnreadableError

logger = logging.getLogger(__name__)


def _list_dir(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return list(it)


class TreeWalker:
    """Depth-first walk of a directory tree, in directory listing order.

    Entries are visited in the order the OS returns them; nothing is sorted.
    A directory is listed completely before descending, so only one
    directory handle is open at a time. Directory symlinks are not followed.

    With ``strict=True`` an unreadable subdirectory aborts the walk. With
    ``strict=False`` it is logged and skipped.
    """

    def __init__(self, root: str | Path, *, extension: str = WAV_EXTENSION,
                 strict: bool = True) -> None:
        self._root = Path(root)
        self._suffix = f".{extension}"
        self._strict = strict

    def walk(self) -> list[Path]:
        """Return all candidate paths under the root directory."""
        return list(self.walk_iter())

    def walk_iter(self) -> Iterator[Path]:
        """Yield candidate paths one at a time (for progress reporting)."""
        try:
            entries = _list_dir(self._root)
        except OSError as exc:
            raise RootUnreadableError(self._root, details={"original": str(exc)}) from exc

        stack: list[Iterator[os.DirEntry]] = [iter(entries)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            path = Path(entry.path)
            if self._is_dir(entry):
                try:
                    children = _list_dir(path)
                except OSError as exc:
                    if self._strict:
                        raise SubdirectoryUnreadableError(
                            path, details={"original": str(exc)}
                        ) from exc
                    logger.warning("Skipping unreadable directory %s: %s", path, exc)
                    continue
                stack.append(iter(children))
            elif path.suffix == self._suffix:
                yield path

    @staticmethod
    def _is_dir(entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=False)
        except OSError:
            return False


def walk(root: str | Path, *, extension: str = WAV_EXTENSION,
         strict: bool = True) -> list[Path]:
    """Return every ``*.wav`` path under *root*, depth-first."""
    return TreeWalker(root, extension=extension, strict=strict).walk()
