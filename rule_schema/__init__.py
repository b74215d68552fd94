"""
rule_schema – Declarative, shape-mirroring validation of nested objects.
"""
from .exceptions import RuleError, InvalidRuleTypeError
from .rules import ArrayRule, ObjectRule, PrimitiveRule, DynamicRule, RuleKind
from .rules import primitive, each, array_rule, nested, dynamic, classify
from .validator import validate_object
from .async_validator import validate_object_async
from .facade import Validator, ValidatorOptions, ValidationResult
from .report import flatten_errors, errors_to_frame, to_markdown

__all__ = [
    "RuleError",
    "InvalidRuleTypeError",
    "ArrayRule",
    "ObjectRule",
    "PrimitiveRule",
    "DynamicRule",
    "RuleKind",
    "primitive",
    "each",
    "array_rule",
    "nested",
    "dynamic",
    "classify",
    "validate_object",
    "validate_object_async",
    "Validator",
    "ValidatorOptions",
    "ValidationResult",
    "flatten_errors",
    "errors_to_frame",
    "to_markdown",
]
