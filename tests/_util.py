"""Shared helpers for the rule-schema test-suite (std-lib only)."""
from __future__ import annotations

import asyncio
from typing import Any, Optional

# ------------------------------------------------------------------ #
# Canned rule functions                                              #
# ------------------------------------------------------------------ #
REQUIRED = "This field is required."


def required_rule(value: Any, root: Any) -> Optional[str]:
    return REQUIRED if value in (None, "") else None


def fail_with(message: str):
    """Rule that always reports *message*."""
    return lambda value, root: message


def passing(value: Any, root: Any) -> None:
    return None


class Recorder:
    """Rule function that records every ``(value, root)`` it is called with."""

    def __init__(self, result: Optional[str] = None):
        self.result = result
        self.calls: list[tuple[Any, Any]] = []

    def __call__(self, value: Any, root: Any) -> Optional[str]:
        self.calls.append((value, root))
        return self.result


class CountingBuilder:
    """Dynamic builder that returns *rule* and counts its invocations."""

    def __init__(self, rule: Any):
        self.rule = rule
        self.calls: list[tuple[Any, Any]] = []

    def __call__(self, value: Any, root: Any) -> Any:
        self.calls.append((value, root))
        return self.rule


def async_fail_with(message: str, delay: float = 0):
    async def rule(value: Any, root: Any) -> str:
        await asyncio.sleep(delay)
        return message
    return rule
