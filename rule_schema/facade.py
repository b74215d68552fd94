"""
facade.py - High-level API wrapping a rule-set into a pass/fail result.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from . import utils
from .async_validator import validate_object_async
from .exceptions import RuleError
from .rules import fields_of
from .validator import validate_object

__all__ = ["Validator", "ValidatorOptions", "ValidationResult"]

log = logging.getLogger(__name__)


@dataclass
class ValidatorOptions:
    """Top-level messages attached to every :class:`ValidationResult`."""

    valid_message: str = "Good to go."
    invalid_message: str = "One or more validation errors occurred."


@dataclass
class ValidationResult:
    is_valid: bool
    message: str
    errors: Optional[dict] = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"is_valid": self.is_valid, "message": self.message}
        if self.errors is not None:
            out["errors"] = self.errors
        return out

    def to_json(self, *, indent: Optional[int] = None) -> str:
        """Serialise the result; attempted values are reduced to plain JSON data."""
        return json.dumps(utils._json_safe(self.to_dict()), indent=indent, ensure_ascii=False)


class Validator:
    """A reusable validator bound to one long-lived rule-set."""

    def __init__(self, rule_set: Any, options: Optional[ValidatorOptions] = None):
        """Bind *rule_set*; a missing or non-mapping rule-set fails immediately."""
        if rule_set is None:
            raise RuleError("validation rule-set is None; a rule-set is mandatory.")
        fields_of(rule_set)
        self.rule_set = rule_set
        self.options = options or ValidatorOptions()

    def validate(self, obj: Any) -> ValidationResult:
        """Validate *obj*, using it as its own root."""
        return self._result(validate_object(obj, obj, self.rule_set))

    async def validate_async(self, obj: Any) -> ValidationResult:
        """Like :meth:`validate`, awaiting coroutine rule functions."""
        return self._result(await validate_object_async(obj, obj, self.rule_set))

    def _result(self, errors: Optional[dict]) -> ValidationResult:
        if errors is None:
            log.info("validation passed")
            return ValidationResult(is_valid=True, message=self.options.valid_message)
        log.info("validation failed on %d field(s): %s", len(errors), ", ".join(map(str, errors)))
        return ValidationResult(is_valid=False, message=self.options.invalid_message, errors=errors)
