"""Registry of namespace prefixes and the directories that hold their classes."""

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from classloader.exceptions import DirectoryNotFoundError

logger = logging.getLogger(__name__)


class NamespaceRegistry:
    """Maps registered namespace prefixes to ordered lists of directories."""

    def __init__(self, delimiter: str = ".") -> None:
        """Initialize an empty registry for identifiers split on ``delimiter``."""
        self.delimiter = delimiter
        self._namespaces: dict[str, list[str]] = {}

    @property
    def namespaces(self) -> dict[str, list[str]]:
        """Copy of prefix -> directories, in registration order."""
        return {prefix: list(dirs) for prefix, dirs in self._namespaces.items()}

    def register(self, prefix: str, directory: str | Path) -> None:
        """Append ``directory`` to the list for ``prefix``.

        Raises DirectoryNotFoundError if the directory does not exist. The
        directory is not scanned.
        """
        valid = isinstance(directory, (str, os.PathLike))
        if not valid or not Path(directory).is_dir():
            msg = (
                f"Cannot register namespace '{prefix}': "
                f"directory '{directory}' does not exist"
            )
            raise DirectoryNotFoundError(msg)
        self._namespaces.setdefault(prefix, []).append(str(directory))

    def register_many(
        self, mapping: Mapping[str, str | Path | Iterable[str | Path]]
    ) -> dict[str, bool]:
        """Register every prefix in ``mapping``, reporting success per prefix.

        A value may be a single directory or a list of them. A failing pair does
        not stop the remaining pairs from being registered. Any other value,
        such as an empty YAML entry, counts as a failure for that prefix.
        """
        results: dict[str, bool] = {}
        for prefix, value in mapping.items():
            if isinstance(value, (str, os.PathLike)):
                directories = [value]
            elif isinstance(value, (list, tuple)):
                directories = list(value)
            else:
                logger.warning(
                    "Cannot register namespace '%s': %r is not a directory",
                    prefix,
                    value,
                )
                results[prefix] = False
                continue
            ok = True
            for directory in directories:
                try:
                    self.register(prefix, directory)
                except DirectoryNotFoundError as exc:
                    logger.warning("%s", exc)
                    ok = False
            results[prefix] = ok
        return results

    def candidates(
        self, namespace_segments: tuple[str, ...]
    ) -> list[tuple[tuple[str, ...], str]]:
        """Return (prefix segments, directory) pairs matching a namespace.

        A prefix matches when the namespace starts with it on segment
        boundaries, so ``Acme`` matches ``Acme.Util`` but not ``AcmeCorp``.
        """
        matches = []
        for prefix, directories in self._namespaces.items():
            prefix_segments = self._segments(prefix)
            if namespace_segments[: len(prefix_segments)] != prefix_segments:
                continue
            matches.extend((prefix_segments, d) for d in directories)
        return matches

    def candidate_directories(self, package_path: str) -> list[str]:
        """Return directories of every prefix matching ``package_path``."""
        segments = self._segments(package_path)
        return [directory for _, directory in self.candidates(segments)]

    def _segments(self, namespace: str) -> tuple[str, ...]:
        # Accept both "Acme.Util" and the package path form "Acme/Util".
        parts = namespace.replace(self.delimiter, os.sep).split(os.sep)
        return tuple(part for part in parts if part)
