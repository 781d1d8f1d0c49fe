"""Pipeline registration and the validation engine."""

from ryandata_class_validator.pipeline.builder import (
    ClassPipelineBuilder,
    FieldPipelineBuilder,
    add_parser,
    add_rule,
    add_type_check_rule,
    declare_field,
    mark_nullable,
    mark_optional,
    pipeline_for,
    validate_imperatively,
)
from ryandata_class_validator.pipeline.engine import (
    NESTED_STAGE_NAME,
    construct_from_validated_fields,
    create_validated,
    validate_or_raise,
)

__all__ = [
    # Registration
    "ClassPipelineBuilder",
    "FieldPipelineBuilder",
    "add_parser",
    "add_rule",
    "add_type_check_rule",
    "declare_field",
    "mark_nullable",
    "mark_optional",
    "pipeline_for",
    "validate_imperatively",
    # Engine
    "NESTED_STAGE_NAME",
    "construct_from_validated_fields",
    "create_validated",
    "validate_or_raise",
]
