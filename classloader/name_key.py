"""Splitting namespaced identifiers into package path and leaf name."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class NameKey:
    """Parsed view of an identifier such as ``Acme.Util.Clock``."""

    full: str
    segments: tuple[str, ...]

    @property
    def leaf(self) -> str:
        """Final segment, the class name."""
        return self.segments[-1] if self.segments else ""

    @property
    def namespace_segments(self) -> tuple[str, ...]:
        """All segments but the leaf."""
        return self.segments[:-1]

    @property
    def package_path(self) -> str:
        """Namespace segments joined with the host path separator."""
        return os.sep.join(self.namespace_segments)

    @property
    def has_namespace(self) -> bool:
        return len(self.segments) > 1


def parse_name_key(identifier: str, delimiter: str = ".") -> NameKey:
    """Parse an identifier; an identifier without delimiter is leaf-only."""
    # Leading or doubled delimiters (e.g. "\\Foo\\Bar") yield empty parts.
    segments = tuple(part for part in identifier.split(delimiter) if part)
    return NameKey(full=identifier, segments=segments)
