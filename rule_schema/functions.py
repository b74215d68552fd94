"""
functions.py - ready-made rule functions
========================================

Every factory returns a function ``(value, root) -> str | None``: ``None``
when the value passes, the violation message otherwise.  All factories
accept an optional ``message`` overriding the default wording.

    rule_set = {
        "email":    [required(), email_address()],
        "qty":      [min_number(1), max_number(10)],
        "password": [required()],
        "confirm":  [equal_to_field("password", "Password must match.")],
    }
"""

from __future__ import annotations

import datetime as _dt
import inspect
import re
from typing import Any, Callable, Container, Optional, Pattern, Union

from . import utils

__all__ = [
    "required",
    "email_address",
    "min_number",
    "max_number",
    "min_length",
    "max_length",
    "is_string",
    "is_date_object",
    "is_in",
    "matches",
    "equal_to_field",
    "custom",
]

RuleFunc = Callable[[Any, Any], Optional[str]]

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def required(message: Optional[str] = None) -> RuleFunc:
    msg = message or "This field is required."

    def rule(value: Any, root: Any) -> Optional[str]:
        return msg if _is_empty(value) else None

    return rule


def email_address(message: Optional[str] = None) -> RuleFunc:
    """Missing values are left to :func:`required`; anything else must look like an email."""
    msg = message or "Invalid email address. The valid email example: john.doe@example.com."

    def rule(value: Any, root: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str) or not _EMAIL_RE.fullmatch(value):
            return msg
        return None

    return rule


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def min_number(minimum: Union[int, float], message: Optional[str] = None) -> RuleFunc:
    msg = message or f"The minimum value for this field is {minimum}."

    def rule(value: Any, root: Any) -> Optional[str]:
        if not _is_number(value) or value < minimum:
            return msg
        return None

    return rule


def max_number(maximum: Union[int, float], message: Optional[str] = None) -> RuleFunc:
    msg = message or f"The maximum value for this field is {maximum}."

    def rule(value: Any, root: Any) -> Optional[str]:
        if not _is_number(value) or value > maximum:
            return msg
        return None

    return rule


def min_length(length: int, message: Optional[str] = None) -> RuleFunc:
    msg = message or f"The minimum length for this field is {length}."

    def rule(value: Any, root: Any) -> Optional[str]:
        if value is None or not hasattr(value, "__len__") or len(value) < length:
            return msg
        return None

    return rule


def max_length(length: int, message: Optional[str] = None) -> RuleFunc:
    msg = message or f"The maximum length for this field is {length}."

    def rule(value: Any, root: Any) -> Optional[str]:
        if value is not None and hasattr(value, "__len__") and len(value) > length:
            return msg
        return None

    return rule


def is_string(message: Optional[str] = None) -> RuleFunc:
    def rule(value: Any, root: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return None
        return message or f"This field is not a valid string, type of value was: {type(value).__name__}."

    return rule


def is_date_object(message: Optional[str] = None) -> RuleFunc:
    """The value must be a ``date``/``datetime`` instance, not an ISO string."""

    def rule(value: Any, root: Any) -> Optional[str]:
        if isinstance(value, _dt.date):
            return None
        return message or f"This field is not a valid date, type of value was: {type(value).__name__}."

    return rule


def is_in(allowed: Container, message: Optional[str] = None) -> RuleFunc:
    def rule(value: Any, root: Any) -> Optional[str]:
        try:
            if value in allowed:
                return None
        except TypeError:
            pass  # unhashable value checked against a set or dict
        return message or f"{value!r} is not an allowed value."

    return rule


def matches(pattern: Union[str, Pattern[str]], message: Optional[str] = None) -> RuleFunc:
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    msg = message or f"This field does not match the pattern {regex.pattern}."

    def rule(value: Any, root: Any) -> Optional[str]:
        if not isinstance(value, str) or regex.search(value) is None:
            return msg
        return None

    return rule


def equal_to_field(field: str, message: Optional[str] = None) -> RuleFunc:
    """The value must equal ``root[field]``."""
    msg = message or f"This field must be equal to {field}."

    def rule(value: Any, root: Any) -> Optional[str]:
        return None if value == utils._get_field(root, field) else msg

    return rule


def custom(predicate: Callable[[Any, Any], bool], message: str) -> RuleFunc:
    """Wrap a boolean ``predicate(value, root)``; *message* is reported when it is falsy.

    The predicate may be a coroutine function; the resulting rule is then
    awaitable and must be run through the async walker.
    """

    def rule(value: Any, root: Any):
        outcome = predicate(value, root)
        if inspect.isawaitable(outcome):
            return _await_predicate(outcome, message)
        return None if outcome else message

    return rule


async def _await_predicate(outcome: Any, message: str) -> Optional[str]:
    return None if await outcome else message
