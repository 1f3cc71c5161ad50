"""Last-resort lookup of class files by name anywhere below a root directory."""

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class FileSystemScanner:
    """Finds a file whose basename matches a class name.

    Traversal is pre-order (a directory is yielded before its children) and
    follows the filesystem's native listing order, so when several files match
    the first one encountered wins.
    """

    def __init__(self, extensions: Sequence[str]) -> None:
        """Initialize the scanner with the accepted extensions (with dots).

        The sequence is kept by reference, so extensions appended later by the
        owner are honoured.
        """
        self.extensions = extensions

    def walk(self, root: str | Path) -> Iterator[os.DirEntry]:
        """Yield every entry below ``root`` in pre-order.

        Uses an explicit stack of directory listings, so the depth of the tree
        is not limited by the recursion limit.
        """
        stack = [_list_directory(root)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            yield entry
            # Symlinked directories are not followed.
            if entry.is_dir(follow_symlinks=False):
                stack.append(_list_directory(entry.path))

    def find(self, root: str | Path, leaf: str) -> str | None:
        """Return the first file below ``root`` named ``leaf`` plus an extension."""
        for entry in self.walk(root):
            stem, ext = os.path.splitext(entry.name)
            if stem != leaf or ext not in self.extensions:
                continue
            if entry.is_file():
                return entry.path
        return None


def _list_directory(directory: str | Path) -> Iterator[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return iter(())
    return iter(entries)
