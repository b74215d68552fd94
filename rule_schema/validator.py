"""
validator.py - recursive rule-set validation engine
===================================================

Walks a rule-set against a plain object and returns an *error tree* that
mirrors the object's shape.  Iteration is driven by the rule-set's declared
fields, never by the object's own keys, so an empty or missing object still
surfaces every ``required``-style violation.

Error tree
----------
``{field: [violation, ...]}``                         primitive field
``{field: {nested error tree}}``                       object field
``{field: {"array_errors": [...],
           "array_element_errors": [{"index", "errors", "attempted_value"}]}}``
                                                       array field

A field appears only if it failed.  A fully valid object yields ``None``.

Public API
----------
RuleError
    Raised for rule-authoring mistakes; never for bad data.

validate_object(obj, root, rule_set) -> dict | None
validate_primitive_field(key, obj, root, rule) -> FieldResult
validate_array_field(key, obj, root, rule) -> ArrayFieldErrors
validate_object_field(key, obj, root, rule) -> FieldResult
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from . import utils
from .exceptions import RuleError
from .rules import RuleKind, classify, fields_of, funcs_of, resolve

__all__ = [
    "RuleError",
    "FieldResult",
    "ArrayFieldErrors",
    "validate_object",
    "validate_primitive_field",
    "validate_array_field",
    "validate_object_field",
]

log = logging.getLogger(__name__)

ARRAY_ERRORS = "array_errors"
ARRAY_ELEMENT_ERRORS = "array_element_errors"


@dataclass
class FieldResult:
    """Outcome of validating one primitive or object field."""

    is_valid: bool
    errors: Any = None


class ArrayFieldErrors(dict):
    """Error node of an array field.

    Tells array nodes apart from nested error trees whose own fields happen
    to be called ``array_errors`` or ``array_element_errors``.
    """


# --------------------------------------------------------------------------- #
# Shared helpers (also used by async_validator)                               #
# --------------------------------------------------------------------------- #

def _check_rule_func(func: Any, key: str) -> None:
    if not callable(func):
        raise RuleError(
            f"rule for field '{key}' contains {type(func).__name__}, which is not a function."
        )


def _require_rule_set(rule_set: Any) -> Mapping:
    if rule_set is None:
        raise RuleError("validation rule-set is None; a rule-set is mandatory.")
    return fields_of(rule_set)


def _array_rule_for(key: str, value: Any, root: Any, rule: Any) -> Any:
    """Resolve *rule* and check it is an array rule (``None`` if a builder gave nothing)."""
    rule = resolve(rule, value, root, key)
    if rule is None:
        return None
    if classify(rule, key) is not RuleKind.ARRAY:
        raise RuleError(f"field '{key}' is not described by an array rule.")
    return rule


def _element_entry(index: int, errors: dict, element: Any) -> dict:
    return {"index": index, "errors": errors, "attempted_value": element}


# --------------------------------------------------------------------------- #
# Field validators                                                            #
# --------------------------------------------------------------------------- #

def _run_rule_funcs(funcs: Sequence, value: Any, root: Any, key: str) -> list:
    violations: list = []
    for func in funcs:
        if func is None:
            continue
        _check_rule_func(func, key)
        violation = func(value, root)
        if inspect.isawaitable(violation):
            if inspect.iscoroutine(violation):
                violation.close()
            raise RuleError(
                f"rule for field '{key}' returned an awaitable; use validate_object_async."
            )
        if violation:
            violations.append(violation)
    return violations


def validate_primitive_field(key: str, obj: Any, root: Any, rule: Any) -> FieldResult:
    """Run every rule function against ``obj[key]``, collecting all violations."""
    value = utils._get_field(obj, key)
    violations = _run_rule_funcs(funcs_of(rule), value, root, key)
    return FieldResult(is_valid=not violations, errors=violations)


def validate_array_field(key: str, obj: Any, root: Any, rule: Any) -> ArrayFieldErrors:
    """Validate an array field; an empty result means the field passed.

    Whole-array rules run once against the array value itself.  Element rules
    only run when the value really is an array.
    """
    value = utils._get_field(obj, key)
    rule = _array_rule_for(key, value, root, rule)
    result = ArrayFieldErrors()
    if rule is None:
        return result

    if rule.array_rules:
        violations = _run_rule_funcs(rule.array_rules, value, root, key)
        if violations:
            result[ARRAY_ERRORS] = violations

    if rule.array_element_rule is not None and utils._is_array(value):
        element_errors = []
        for index, element in enumerate(utils._elements(value)):
            element_rule_set = resolve(rule.array_element_rule, element, root, key)
            errors = validate_object(element, root, element_rule_set)
            if errors:
                element_errors.append(_element_entry(index, errors, element))
        if element_errors:
            result[ARRAY_ELEMENT_ERRORS] = element_errors
    elif rule.array_element_rule is not None:
        log.debug("field %r is not an array (%s); element rules skipped", key, type(value).__name__)

    return result


def validate_object_field(key: str, obj: Any, root: Any, rule: Any) -> FieldResult:
    """Recurse into ``obj[key]`` with a nested rule-set."""
    errors = validate_object(utils._get_field(obj, key), root, rule)
    return FieldResult(is_valid=errors is None, errors=errors)


# --------------------------------------------------------------------------- #
# Tree walker                                                                 #
# --------------------------------------------------------------------------- #

def validate_object(obj: Any, root: Any, rule_set: Any) -> Optional[dict]:
    """Validate *obj* against *rule_set* and return its error tree or ``None``.

    Parameters
    ----------
    obj
        Mapping or attribute object to validate.  ``None`` is treated as ``{}``.
    root
        The top-level object, handed unchanged to every rule function and
        builder at any depth.
    rule_set
        Mapping (or :class:`~rule_schema.rules.ObjectRule`) of field rules.
    """
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
                log.debug("builder for field %r returned no rule", key)
                continue
            kind = classify(rule, key)

        if kind is RuleKind.PRIMITIVE:
            result = validate_primitive_field(key, obj, root, rule)
            if not result.is_valid:
                errors[key] = result.errors
        elif kind is RuleKind.ARRAY:
            array_result = validate_array_field(key, obj, root, rule)
            if array_result:
                errors[key] = array_result
        elif utils._is_object(value):
            result = validate_object_field(key, obj, root, rule)
            if not result.is_valid:
                errors[key] = result.errors
        else:
            log.debug("field %r is not object-typed (%s); nested rules skipped", key, type(value).__name__)

    if not errors:
        return None
    log.debug("%d field(s) failed: %s", len(errors), list(errors))
    return errors
