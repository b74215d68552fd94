"""
utils.py – shared, low-level helpers for the rule-schema package.

This module consolidates common helpers for:
- Field access on mappings and attribute objects
- Shape checks (object-typed vs. array-typed values)
- JSON-safe snapshots of attempted values
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd

# --------------------------------------------------------------------------- #
# Field access                                                                #
# --------------------------------------------------------------------------- #

def _get_field(obj: Any, key: str) -> Any:
    """Return ``obj[key]`` for mappings, ``obj.key`` otherwise (``None`` if absent)."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


# --------------------------------------------------------------------------- #
# Shape checks                                                                #
# --------------------------------------------------------------------------- #

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def _is_array(value: Any) -> bool:
    """True for lists, tuples and DataFrames; strings are not arrays."""
    return isinstance(value, (list, tuple, pd.DataFrame))


def _is_object(value: Any) -> bool:
    """True iff *value* can be walked field-by-field against a nested rule-set."""
    if value is None or isinstance(value, _SCALARS) or _is_array(value):
        return False
    return isinstance(value, Mapping) or hasattr(value, "__dict__")


def _elements(value: Any) -> list[Any]:
    """Return the elements of an array value in index order.

    DataFrame rows come back as record dicts so they can be validated like
    any other object.
    """
    if isinstance(value, pd.DataFrame):
        return value.to_dict(orient="records")
    return list(value)


# --------------------------------------------------------------------------- #
# Serialisation                                                               #
# --------------------------------------------------------------------------- #

def _json_safe(x: Any) -> Any:
    """Recursively turn an attempted value into plain JSON-compatible data."""
    if isinstance(x, Mapping):
        return {str(k): _json_safe(v) for k, v in x.items()}
    if isinstance(x, pd.DataFrame):
        return [_json_safe(r) for r in x.to_dict(orient="records")]
    if isinstance(x, (list, tuple)):
        return [_json_safe(v) for v in x]
    if x is None or isinstance(x, (str, int, float, bool)):
        return x
    if hasattr(x, "isoformat"):
        return x.isoformat()
    if hasattr(x, "__dict__"):
        return {k: _json_safe(v) for k, v in vars(x).items() if not k.startswith("_")}
    return str(x)
