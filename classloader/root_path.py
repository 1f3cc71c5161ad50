"""Lazy resolution of the root directory used for filesystem search."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ROOT_ENV_VAR = "DOCUMENT_ROOT"


class RootPath:
    """Computes the scan root once and remembers it.

    Precedence: explicit setting, then the ``env_var`` environment variable,
    then the directory this package is installed in.
    """

    def __init__(
        self, explicit: str | Path | None = None, env_var: str = DEFAULT_ROOT_ENV_VAR
    ) -> None:
        self.env_var = env_var
        self._explicit = Path(explicit) if explicit else None
        self._resolved: Path | None = None

    def set(self, path: str | Path) -> None:
        """Replace the root, dropping any previously computed value."""
        self._explicit = Path(path)
        self._resolved = None

    def get(self) -> Path:
        if self._resolved is None:
            self._resolved = self._compute()
            logger.debug("Using root path %s", self._resolved)
        return self._resolved

    def _compute(self) -> Path:
        if self._explicit is not None:
            raw = self._explicit
        elif os.environ.get(self.env_var):
            raw = Path(os.environ[self.env_var])
        else:
            raw = Path(__file__).parent
        # resolve() collapses duplicate separators and follows symlinks
        return raw.resolve()
