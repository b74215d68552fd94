# rule_schema/report.py
from __future__ import annotations
from typing import Any, Mapping, Optional

import pandas as pd

from .validator import ARRAY_ELEMENT_ERRORS, ARRAY_ERRORS, ArrayFieldErrors

__all__ = ["flatten_errors", "errors_to_frame", "to_markdown"]


def _is_array_errors(node: Mapping[str, Any]) -> bool:
    return isinstance(node, ArrayFieldErrors)


def _walk(node: Any, path: str, out: dict[str, list[str]]) -> None:
    if isinstance(node, list):
        out.setdefault(path, []).extend(str(v) for v in node)
        return
    if not isinstance(node, Mapping):
        return
    if _is_array_errors(node):
        if node.get(ARRAY_ERRORS):
            out.setdefault(path, []).extend(str(v) for v in node[ARRAY_ERRORS])
        for entry in node.get(ARRAY_ELEMENT_ERRORS) or []:
            _walk(entry["errors"], f"{path}[{entry['index']}]", out)
        return
    for key, child in node.items():
        _walk(child, f"{path}.{key}" if path else str(key), out)


def flatten_errors(errors: Optional[Mapping[str, Any]], path: str = "root") -> dict[str, list[str]]:
    """
    Flatten an error tree into ``{path: [message, ...]}``.

    Paths use the same notation as error messages elsewhere in the package:
    ``root.customer.email``, ``root.prices[1].level``.  Whole-array
    violations are reported on the array's own path.
    """
    out: dict[str, list[str]] = {}
    if errors:
        _walk(errors, path, out)
    return out


def errors_to_frame(errors: Optional[Mapping[str, Any]], path: str = "root") -> pd.DataFrame:
    """One row per violation, columns ``path`` and ``message``."""
    rows = [
        {"path": p, "message": m}
        for p, messages in flatten_errors(errors, path).items()
        for m in messages
    ]
    return pd.DataFrame(rows, columns=["path", "message"])


def to_markdown(errors: Optional[Mapping[str, Any]], *, heading_level: int = 2) -> str:
    """
    Convert an error tree into a Markdown report.

    Parameters
    ----------
    errors : Mapping[str, Any] | None
        Error tree returned by :func:`rule_schema.validator.validate_object`.
    heading_level : int, default 2
        Markdown heading level for each field path (##, ###, …).

    Returns
    -------
    str
        Markdown document; empty when there are no errors.
    """
    h = "#" * heading_level
    parts: list[str] = []
    for p, messages in flatten_errors(errors).items():
        parts.append(f"{h} {p}")
        parts.extend(f"- {m}" for m in messages)
        parts.append("")             # blank line after each section
    return "\n".join(parts).rstrip()
