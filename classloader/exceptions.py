"""Exception hierarchy for the class loader.

Registration errors are caught at the ``ClassLoader`` surface and reported as
``False``; cache decode errors are recovered by falling back to a cold cache.
"""

__all__ = [
    "ClassLoaderError",
    "ConfigurationError",
    "DirectoryNotFoundError",
    "ClassFileNotFoundError",
    "CacheDecodeError",
]


class ClassLoaderError(Exception):
    """Root exception for all classloader errors."""


class ConfigurationError(ClassLoaderError):
    """Raised when the loader configuration cannot be used."""


class DirectoryNotFoundError(ClassLoaderError):
    """Raised when a namespace is registered against a missing directory."""


class ClassFileNotFoundError(ClassLoaderError):
    """Raised when an identifier is registered against a missing file."""


class CacheDecodeError(ClassLoaderError):
    """Raised when a persisted cache snapshot cannot be decoded."""
