"""Logic for deep merging configuration dictionaries."""

from typing import Any

# Lists below these keys are appended rather than replaced.
APPEND_KEYS = frozenset({"namespaces"})


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


def deep_merge(
    base: dict[str, Any], update: dict[str, Any], *, append_lists: bool = False
) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays in 'update' replace 'base' arrays, EXCEPT below 'namespaces',
      where directories are appended in order (duplicates dropped), the same
      way registering a namespace twice appends to its directory list. A single
      directory given as a string is treated as a one-item list there.
    """
    result = base.copy()
    for key, value in update.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(
                current, value, append_lists=append_lists or key in APPEND_KEYS
            )
        elif append_lists and current is not None and not isinstance(current, dict):
            current = _as_list(current)
            extra = [v for v in _as_list(value) if v is not None and v not in current]
            result[key] = current + extra
        else:
            # Default: Replacement (scalars and other arrays)
            result[key] = value
    return result
