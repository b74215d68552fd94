"""
exceptions.py - configuration errors raised while walking a rule-set.

Bad *data* never raises: violations are returned as an error tree.  The
exceptions below signal a bug in how a rule-set was authored and always
propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "RuleError",
    "InvalidRuleTypeError",
]


class RuleError(ValueError):
    """Raised when a rule-set is missing or malformed."""


class InvalidRuleTypeError(RuleError):
    """Raised when a field rule is neither a list, mapping, array rule nor callable."""

    def __init__(self, rule_type: str, field: Optional[str] = None):
        self.rule_type = rule_type
        self.field = field
        where = f" (field '{field}')" if field is not None else ""
        super().__init__(f"{rule_type} is not a valid rule{where}.")
