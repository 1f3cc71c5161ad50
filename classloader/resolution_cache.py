"""Persistent cache of identifier to file path resolutions."""

import json
import logging
from pathlib import Path

from classloader.exceptions import CacheDecodeError

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1
DEFAULT_CACHE_FILE = "classMap.cache"


class ResolutionCache:
    """Maps full identifiers to the file paths they resolved to.

    Entries are never invalidated: a cached path that no longer exists is still
    returned by ``lookup``. The file is rewritten wholesale by ``save``.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize an empty cache backed by ``path``.

        Without a path the cache lives next to this module as ``classMap.cache``.
        """
        self.path = Path(path) if path else Path(__file__).parent / DEFAULT_CACHE_FILE
        self.mapping: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.mapping)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.mapping

    def lookup(self, identifier: str) -> str | None:
        """Return the cached path for an identifier, without touching disk."""
        return self.mapping.get(identifier)

    def put(self, identifier: str, path: str) -> None:
        """Insert or overwrite the path for an identifier."""
        self.mapping[identifier] = path

    def entries(self) -> dict[str, str]:
        """Return a copy of all cached entries."""
        return dict(self.mapping)

    def hydrate(self, data: bytes) -> None:
        """Replace the in-memory map with a serialized snapshot.

        Raises CacheDecodeError on malformed input, leaving the cache empty.
        """
        self.mapping = {}
        try:
            payload = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Cache snapshot is not valid JSON: {exc}"
            raise CacheDecodeError(msg) from exc

        if not isinstance(payload, dict):
            msg = "Cache snapshot must be a JSON object"
            raise CacheDecodeError(msg)

        meta = payload.get("meta")
        schema_ver = meta.get("schema_version", 0) if isinstance(meta, dict) else 0
        if schema_ver != CURRENT_SCHEMA_VERSION:
            msg = f"Schema version mismatch ({schema_ver} != {CURRENT_SCHEMA_VERSION})"
            raise CacheDecodeError(msg)

        raw_mapping = payload.get("mapping", {})
        if not isinstance(raw_mapping, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw_mapping.items()
        ):
            msg = "Cache mapping must map identifiers to path strings"
            raise CacheDecodeError(msg)

        self.mapping = dict(raw_mapping)

    def serialize_snapshot(self) -> bytes:
        """Encode the full map deterministically."""
        return json.dumps(
            {
                "meta": {"schema_version": CURRENT_SCHEMA_VERSION},
                "mapping": self.mapping,
            },
            indent=2,
            sort_keys=True,
        ).encode("utf-8")

    def load(self) -> bool:
        """Hydrate from the cache file.

        Returns True if the file was read. A missing or corrupt file leaves
        the cache cold.
        """
        if not self.path.exists():
            return False

        try:
            self.hydrate(self.path.read_bytes())
        except CacheDecodeError as exc:
            logger.warning("Ignoring corrupt cache %s: %s", self.path, exc)
            return False
        except OSError:
            logger.exception("Error reading cache %s", self.path)
            return False

        logger.debug("Loaded %d cached entries from %s", len(self.mapping), self.path)
        return True

    def save(self) -> bool:
        """Write the cache file if there is at least one entry.

        Any existing file is overwritten, not merged.
        """
        if not self.mapping:
            return False

        # Create directory if needed
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        self.path.write_bytes(self.serialize_snapshot())
        logger.debug("Saved %d cached entries to %s", len(self.mapping), self.path)
        return True
