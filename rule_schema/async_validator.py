"""
async_validator.py - awaiting variant of the rule-set walker
============================================================

Same traversal and error-tree shape as :mod:`rule_schema.validator`, but any
rule function may be a coroutine function (e.g. "email is not registered yet"
backed by a repository lookup).  Results are awaited one at a time in list
order, so violations keep their rule order.  Builders stay synchronous.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Optional, Sequence

from . import utils
from .rules import RuleKind, classify, funcs_of, resolve
from .validator import (
    ARRAY_ELEMENT_ERRORS,
    ARRAY_ERRORS,
    ArrayFieldErrors,
    FieldResult,
    _array_rule_for,
    _check_rule_func,
    _element_entry,
    _require_rule_set,
)

__all__ = [
    "validate_object_async",
    "validate_primitive_field_async",
    "validate_array_field_async",
    "validate_object_field_async",
]

log = logging.getLogger(__name__)


async def _run_rule_funcs(funcs: Sequence, value: Any, root: Any, key: str) -> list:
    violations: list = []
    for func in funcs:
        if func is None:
            continue
        _check_rule_func(func, key)
        violation = func(value, root)
        if inspect.isawaitable(violation):
            violation = await violation
        if violation:
            violations.append(violation)
    return violations


async def validate_primitive_field_async(key: str, obj: Any, root: Any, rule: Any) -> FieldResult:
    value = utils._get_field(obj, key)
    violations = await _run_rule_funcs(funcs_of(rule), value, root, key)
    return FieldResult(is_valid=not violations, errors=violations)


async def validate_array_field_async(key: str, obj: Any, root: Any, rule: Any) -> ArrayFieldErrors:
    value = utils._get_field(obj, key)
    rule = _array_rule_for(key, value, root, rule)
    result = ArrayFieldErrors()
    if rule is None:
        return result

    if rule.array_rules:
        violations = await _run_rule_funcs(rule.array_rules, value, root, key)
        if violations:
            result[ARRAY_ERRORS] = violations

    if rule.array_element_rule is not None and utils._is_array(value):
        element_errors = []
        for index, element in enumerate(utils._elements(value)):
            element_rule_set = resolve(rule.array_element_rule, element, root, key)
            errors = await validate_object_async(element, root, element_rule_set)
            if errors:
                element_errors.append(_element_entry(index, errors, element))
        if element_errors:
            result[ARRAY_ELEMENT_ERRORS] = element_errors

    return result


async def validate_object_field_async(key: str, obj: Any, root: Any, rule: Any) -> FieldResult:
    errors = await validate_object_async(utils._get_field(obj, key), root, rule)
    return FieldResult(is_valid=errors is None, errors=errors)


async def validate_object_async(obj: Any, root: Any, rule_set: Any) -> Optional[dict]:
    """Awaiting counterpart of :func:`rule_schema.validator.validate_object`."""
    fields = _require_rule_set(rule_set)
    if obj is None:
        obj = {}

    errors: dict = {}
    for key, rule in fields.items():
        if rule is None:
            continue

        value = utils._get_field(obj, key)
        kind = classify(rule, key)
        if kind is RuleKind.DYNAMIC:
            rule = resolve(rule, value, root, key)
            if rule is None:
                continue
            kind = classify(rule, key)

        if kind is RuleKind.PRIMITIVE:
            result = await validate_primitive_field_async(key, obj, root, rule)
            if not result.is_valid:
                errors[key] = result.errors
        elif kind is RuleKind.ARRAY:
            array_result = await validate_array_field_async(key, obj, root, rule)
            if array_result:
                errors[key] = array_result
        elif utils._is_object(value):
            result = await validate_object_field_async(key, obj, root, rule)
            if not result.is_valid:
                errors[key] = result.errors
        else:
            log.debug("field %r is not object-typed; nested rules skipped", key)

    return errors or None
