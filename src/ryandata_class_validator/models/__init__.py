"""Pipeline metadata models."""

from __future__ import annotations

from ryandata_class_validator.models.context import (
    DEFAULT_PARSER_NAME,
    DEFAULT_RULE_NAME,
    UNDEFINED,
    ClassPipelineContext,
    FieldPipelineContext,
    NamedParser,
    NamedRule,
    ParseFunction,
    RuleOutcome,
    RuleTest,
    is_undefined,
)

__all__ = [
    "UNDEFINED",
    "is_undefined",
    "DEFAULT_PARSER_NAME",
    "DEFAULT_RULE_NAME",
    "ClassPipelineContext",
    "FieldPipelineContext",
    "NamedParser",
    "NamedRule",
    "ParseFunction",
    "RuleOutcome",
    "RuleTest",
]
