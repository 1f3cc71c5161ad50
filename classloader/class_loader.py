"""Resolution of namespaced identifiers to the source files that define them.

``ClassLoader`` tries a fixed chain of strategies and remembers every hit:

1. the resolution cache (previous hits and explicitly registered classes),
2. then, in the configured ``strategy_order``:
   - ``namespace``: directories registered for a prefix of the identifier,
   - ``convention``: the identifier itself turned into a relative path,
   - ``filesystem``: a recursive search for the class name below the root path.

A hit is stored in the cache under the full identifier. Misses are never
cached, so registering a namespace later can make a missed name resolvable.
"""

import atexit
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from classloader.exceptions import ClassFileNotFoundError, DirectoryNotFoundError
from classloader.filesystem_scanner import FileSystemScanner
from classloader.load_config import build_config, normalize_extension
from classloader.name_key import NameKey, parse_name_key
from classloader.namespace_registry import NamespaceRegistry
from classloader.resolution_cache import ResolutionCache
from classloader.resolution_result import MISS, ResolutionResult
from classloader.root_path import RootPath

logger = logging.getLogger(__name__)

LoadCallback = Callable[[str, str], None]


class ClassLoader:
    """Resolves identifiers to files and keeps a persistent resolution cache.

    Not thread-safe: callers sharing an instance across threads must guard it
    with a lock.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        on_load: LoadCallback | None = None,
    ) -> None:
        """Build a loader from a configuration mapping merged over the defaults.

        ``on_load`` is called with (identifier, path) by ``resolve_and_load``
        once a file is found; without it identifiers are only recorded.
        """
        self.config = build_config(config)
        self.on_load = on_load

        self.delimiter: str = self.config["namespace_delimiter"]
        self.namespace_match: str = self.config["namespace_match"]
        self.strategy_order: list[str] = list(self.config["strategy_order"])
        convention_root = self.config["convention_root"]
        self.convention_root = Path(convention_root) if convention_root else None

        self.accepted_extensions: list[str] = []
        for extension in self.config["accepted_extensions"]:
            self.add_accepted_extension(extension)

        caching = self.config["caching"]
        self.caching_enabled = bool(caching["enabled"])
        self.cache = ResolutionCache(caching["cache_file"])
        self.registry = NamespaceRegistry(self.delimiter)
        self.scanner = FileSystemScanner(self.accepted_extensions)
        self.root_path = RootPath(
            self.config["root_path"], self.config["root_env_var"]
        )
        self.loaded: dict[str, str] = {}
        self._closed = False

        self._strategies: dict[str, Callable[[NameKey], str | None]] = {
            "namespace": self._find_in_namespaces,
            "convention": self._find_by_convention,
            "filesystem": self._find_in_filesystem,
        }

        if self.caching_enabled:
            self.cache.load()

        self.register_namespaces(self.config["namespaces"])
        self.register_classes(self.config["classes"])

    def __enter__(self) -> "ClassLoader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -----------------------------
    # Registration
    # -----------------------------

    def register_namespace(self, prefix: str, directory: str | Path) -> bool:
        """Add a directory for a namespace prefix; False if it does not exist."""
        try:
            self.registry.register(prefix, directory)
        except DirectoryNotFoundError as exc:
            logger.warning("%s", exc)
            return False
        return True

    def register_namespaces(
        self, mapping: Mapping[str, str | Path | Iterable[str | Path]]
    ) -> dict[str, bool]:
        """Register several prefixes; one failure does not stop the others."""
        return self.registry.register_many(mapping)

    def register_class(self, identifier: str, file: str | Path) -> bool:
        """Map an identifier straight to a file; False if the file is missing."""
        try:
            _require_file(identifier, file)
        except ClassFileNotFoundError as exc:
            logger.warning("%s", exc)
            return False

        self.cache.put(identifier, str(file))
        return True

    def register_classes(self, mapping: Mapping[str, str | Path]) -> dict[str, bool]:
        """Register several identifier -> file mappings, reporting each."""
        return {
            identifier: self.register_class(identifier, file)
            for identifier, file in mapping.items()
        }

    def get_namespaces(self) -> dict[str, list[str]]:
        return self.registry.namespaces

    def get_loaded_identifiers(self) -> dict[str, str]:
        """Identifiers loaded through ``resolve_and_load`` and their files."""
        return dict(self.loaded)

    def set_root_path(self, path: str | Path) -> bool:
        """Set the filesystem search root; ignored unless it is a directory."""
        if not Path(path).is_dir():
            logger.warning("Ignoring root path %s: not a directory", path)
            return False
        self.root_path.set(path)
        return True

    def add_accepted_extension(self, extension: str) -> None:
        """Append an extension to try after the existing ones.

        Raises ConfigurationError for an empty extension.
        """
        extension = normalize_extension(extension)
        if extension not in self.accepted_extensions:
            self.accepted_extensions.append(extension)

    # -----------------------------
    # Resolution
    # -----------------------------

    def resolve(self, identifier: str) -> ResolutionResult:
        """Resolve an identifier, caching the file on success."""
        cached = self.cache.lookup(identifier)
        if cached is not None:
            return ResolutionResult(identifier, cached, "cache")

        key = parse_name_key(identifier, self.delimiter)
        if not key.segments:
            return ResolutionResult(identifier, None, MISS)

        for name in self.strategy_order:
            path = self._strategies[name](key)
            if path is not None:
                self.cache.put(identifier, path)
                logger.debug("Resolved %s to %s via %s", identifier, path, name)
                return ResolutionResult(identifier, path, name)

        logger.debug("No file found for %s", identifier)
        return ResolutionResult(identifier, None, MISS)

    def find_file(self, identifier: str) -> str | None:
        """Return the file for an identifier, or None if nothing matches."""
        return self.resolve(identifier).path

    def resolve_and_load(self, identifier: str) -> bool:
        """Resolve an identifier and hand the file to ``on_load``.

        Returns False when no strategy found the identifier, so a caller can
        fall through to other loaders.
        """
        result = self.resolve(identifier)
        if not result.found:
            return False

        if self.on_load is not None:
            self.on_load(identifier, result.path)
        self.loaded[identifier] = result.path
        return True

    def _probe(self, base: Path) -> str | None:
        """Return the first ``base + extension`` that is an existing file."""
        for extension in self.accepted_extensions:
            candidate = Path(f"{base}{extension}")
            if candidate.is_file():
                return str(candidate)
        return None

    def _find_in_namespaces(self, key: NameKey) -> str | None:
        for prefix_segments, directory in self.registry.candidates(
            key.namespace_segments
        ):
            base = Path(directory)
            if self.namespace_match == "nested":
                # Sub-namespaces below the registered prefix become folders.
                base = base.joinpath(*key.namespace_segments[len(prefix_segments) :])
            found = self._probe(base / key.leaf)
            if found:
                return found
        return None

    def _find_by_convention(self, key: NameKey) -> str | None:
        relative = os.path.join(*key.segments)
        if self.convention_root is not None:
            return self._probe(self.convention_root / relative)
        return self._probe(Path(relative))

    def _find_in_filesystem(self, key: NameKey) -> str | None:
        return self.scanner.find(self.root_path.get(), key.leaf)

    # -----------------------------
    # Persistence
    # -----------------------------

    def close(self) -> None:
        """Persist the cache if caching is enabled. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if not self.caching_enabled:
            return
        try:
            self.cache.save()
        except OSError:
            logger.exception("Error writing cache %s", self.cache.path)

    def register_shutdown_hook(self) -> None:
        """Persist the cache when the interpreter exits."""
        atexit.register(self.close)


def _require_file(identifier: str, file: str | Path) -> None:
    valid = isinstance(file, (str, os.PathLike))
    if not valid or not Path(file).is_file():
        msg = f"Cannot register '{identifier}': file '{file}' does not exist"
        raise ClassFileNotFoundError(msg)
