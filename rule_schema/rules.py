"""
rules.py - tagged rule variants and the rule classifier
=======================================================

A *rule-set* maps field names to one of four rule kinds:

* **primitive** - an ordered list of rule functions ``(value, root) -> str | None``
* **array**     - an :class:`ArrayRule` with whole-array rules and/or a
  per-element rule-set (static, or built from each element and the root)
* **object**    - a nested rule-set applied to an object-typed field value
* **dynamic**   - a builder ``(value, root) -> rule`` resolved before dispatch

Rules can be written with the explicit builders below or as plain literals.
Literals are classified by their Python type only: a ``list``/``tuple`` is a
primitive rule, a ``Mapping`` is a nested rule-set, and a callable is a
dynamic builder.  Array rules are always written with :class:`ArrayRule`
(or :func:`each`), so classification never guesses from a mapping's keys; a plain
mapping holding only ``array_rules``/``array_element_rule`` keys is rejected
rather than silently treated as a nested rule-set.

Public API
----------
RuleKind, PrimitiveRule, ArrayRule, ObjectRule, DynamicRule
primitive(*funcs), each(element_rule, *, array_rules), array_rule(...),
nested(fields), dynamic(builder)
classify(rule, field=None) -> RuleKind
resolve(rule, value, root, field=None) -> rule | None
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Sequence

from .exceptions import InvalidRuleTypeError, RuleError

__all__ = [
    "RuleKind",
    "PrimitiveRule",
    "ArrayRule",
    "ObjectRule",
    "DynamicRule",
    "primitive",
    "each",
    "array_rule",
    "nested",
    "dynamic",
    "classify",
    "resolve",
    "fields_of",
    "funcs_of",
    "MAX_RESOLVE_DEPTH",
]

RuleFunc = Callable[[Any, Any], Any]
RuleBuilder = Callable[[Any, Any], Any]

# A builder that keeps returning builders is a rule-authoring bug.
MAX_RESOLVE_DEPTH = 16
_ARRAY_RULE_KEYS = frozenset({"array_rules", "array_element_rule"})


class RuleKind(Enum):
    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"
    DYNAMIC = "dynamic"


# --------------------------------------------------------------------------- #
# Variants                                                                    #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class PrimitiveRule:
    """Ordered rule functions applied to one field value."""

    funcs: tuple
    kind: ClassVar[RuleKind] = RuleKind.PRIMITIVE


@dataclass(frozen=True)
class ArrayRule:
    """Rules for an array field.

    ``array_rules`` run once against the whole array value.
    ``array_element_rule`` is a rule-set applied to every element, or a
    builder ``(element, root) -> rule-set`` evaluated per element.
    """

    array_rules: Optional[tuple] = None
    array_element_rule: Any = None
    kind: ClassVar[RuleKind] = RuleKind.ARRAY


@dataclass(frozen=True)
class ObjectRule:
    """A nested rule-set for an object-typed field."""

    fields: Mapping
    kind: ClassVar[RuleKind] = RuleKind.OBJECT


@dataclass(frozen=True)
class DynamicRule:
    """A rule computed from the field value and the root object."""

    builder: RuleBuilder
    kind: ClassVar[RuleKind] = RuleKind.DYNAMIC


_VARIANTS = (PrimitiveRule, ArrayRule, ObjectRule, DynamicRule)


# --------------------------------------------------------------------------- #
# Builders                                                                    #
# --------------------------------------------------------------------------- #

def primitive(*funcs: Optional[RuleFunc]) -> PrimitiveRule:
    """Primitive rule from rule functions; ``None`` slots are allowed and skipped."""
    return PrimitiveRule(tuple(funcs))


def array_rule(
    array_rules: Optional[Sequence[Optional[RuleFunc]]] = None,
    array_element_rule: Any = None,
) -> ArrayRule:
    return ArrayRule(
        array_rules=tuple(array_rules) if array_rules is not None else None,
        array_element_rule=array_element_rule,
    )


def each(
    element_rule: Any = None,
    *,
    array_rules: Optional[Sequence[Optional[RuleFunc]]] = None,
) -> ArrayRule:
    """Shorthand: ``each({"qty": [...]}, array_rules=[...])``."""
    return array_rule(array_rules=array_rules, array_element_rule=element_rule)


def nested(fields: Mapping[str, Any]) -> ObjectRule:
    return ObjectRule(fields)


def dynamic(builder: RuleBuilder) -> DynamicRule:
    return DynamicRule(builder)


# --------------------------------------------------------------------------- #
# Classification                                                              #
# --------------------------------------------------------------------------- #

def classify(rule: Any, field: Optional[str] = None) -> RuleKind:
    """Return the :class:`RuleKind` of *rule*.

    Raises
    ------
    InvalidRuleTypeError
        If *rule* is not one of the supported shapes.
    RuleError
        If *rule* is a plain mapping holding only array-rule keys.
    """
    if isinstance(rule, _VARIANTS):
        return rule.kind
    if isinstance(rule, (list, tuple)):
        return RuleKind.PRIMITIVE
    if isinstance(rule, Mapping):
        if rule and set(rule) <= _ARRAY_RULE_KEYS:
            raise RuleError(
                f"field '{field}' uses array_rules/array_element_rule keys on a plain mapping; "
                "write it with ArrayRule or each()."
            )
        return RuleKind.OBJECT
    if callable(rule):
        return RuleKind.DYNAMIC
    raise InvalidRuleTypeError(type(rule).__name__, field)


def resolve(rule: Any, value: Any, root: Any, field: Optional[str] = None) -> Any:
    """Invoke dynamic builders with ``(value, root)`` until a concrete rule remains.

    Returns ``None`` when a builder yields no rule, meaning the field is not
    validated on this pass.
    """
    depth = 0
    while classify(rule, field) is RuleKind.DYNAMIC:
        if depth >= MAX_RESOLVE_DEPTH:
            raise RuleError(
                f"rule builder for field '{field}' did not resolve after {MAX_RESOLVE_DEPTH} calls."
            )
        builder = rule.builder if isinstance(rule, DynamicRule) else rule
        rule = builder(value, root)
        depth += 1
        if rule is None:
            return None
    return rule


def funcs_of(rule: Any) -> Sequence:
    """Rule functions of a primitive rule (variant or plain list)."""
    return rule.funcs if isinstance(rule, PrimitiveRule) else rule


def fields_of(rule_set: Any) -> Mapping:
    """Field mapping of a rule-set (:class:`ObjectRule` or plain mapping)."""
    if isinstance(rule_set, ObjectRule):
        return rule_set.fields
    if isinstance(rule_set, Mapping):
        return rule_set
    raise RuleError(f"a rule-set must be a mapping, got {type(rule_set).__name__}.")
