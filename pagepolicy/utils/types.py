from typing import Any, Callable, Mapping, Sequence

# Type aliases for better clarity
QueryParams = Mapping[str, Any]
NavParams = dict[str, str]
OrderingKey = Callable[[Any], Any]

# Constants
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def get_param(params: QueryParams, name: str) -> str | None:
    """Read a single raw query parameter.

    Multi-valued parameters resolve to their last value, and blank
    strings are treated as absent.

    Args:
        params: Raw query mapping
        name: Parameter name

    Returns:
        The stripped string value, or None when absent
    """
    value = params.get(name)
    if isinstance(value, Sequence) and not isinstance(value, str):
        value = value[-1] if value else None
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def merge_params(base: NavParams | None = None, **kwargs: Any) -> NavParams:
    """Merge navigation params, dropping keys whose value is None."""
    merged = dict(base or {})
    for key, value in kwargs.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = str(value)
    return merged
