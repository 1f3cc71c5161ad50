"""Data model for the outcome of resolving an identifier to a file."""

from dataclasses import dataclass

MISS = "miss"


@dataclass
class ResolutionResult:
    """Represents the outcome of resolving one identifier."""

    identifier: str
    path: str | None
    strategy: str  # cache/namespace/convention/filesystem, or "miss"

    @property
    def found(self) -> bool:
        return self.path is not None
