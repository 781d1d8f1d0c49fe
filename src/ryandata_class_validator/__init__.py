"""ryandata-class-validator: build validated class instances from untyped data.

This package turns loosely-structured input (parsed JSON) into instances of
plain Python classes, or a complete list of human-readable errors:
- Per-field pipelines of parsers and rules, registered once per class
- Recursive validation of fields whose type is itself a validated class
- Ok/Err results instead of exceptions for data problems
- Pandas and abstract-validation-base integration

Quick Start:
    >>> from ryandata_class_validator import create_validated, pipeline_for
    >>> class Person:
    ...     name: str
    ...     age: int
    >>> (
    ...     pipeline_for(Person)
    ...     .field("name", str).type_check()
    ...     .field("age", int).type_check()
    ... )
    >>> result = create_validated(Person, {"name": "Test", "age": 30})
    >>> result.value.name
    'Test'

    # Invalid input reports every problem
    >>> create_validated(Person, {"name": 12}).value
    ['validate-design-type(name): Expected `str`, but got `12`',
     'validate-design-type(age): Expected `int`, but got `undefined`']
"""

from __future__ import annotations  # noqa: I001

# Import order is intentional to avoid circular imports - do not auto-fix
from ryandata_class_validator.core import (
    PACKAGE_NAME,
    ClassValidatorUsageError,
    Err,
    Ok,
    PipelineRegistry,
    Result,
    RyanDataClassValidationError,
    get_class_context,
    get_or_create_class_context,
    run_catching,
)
from ryandata_class_validator.models import (
    UNDEFINED,
    ClassPipelineContext,
    FieldPipelineContext,
    NamedParser,
    NamedRule,
    is_undefined,
)
from ryandata_class_validator.config import (
    ValidatorConfig,
    get_default_config,
    reset_default_config,
)
from ryandata_class_validator.pipeline import (
    ClassPipelineBuilder,
    FieldPipelineBuilder,
    add_parser,
    add_rule,
    add_type_check_rule,
    construct_from_validated_fields,
    create_validated,
    declare_field,
    mark_nullable,
    mark_optional,
    pipeline_for,
    validate_imperatively,
    validate_or_raise,
)
from ryandata_class_validator.validation import ClassValidator, create_class_validators
from ryandata_class_validator.pandas_ext import (
    register_accessor,
    validate_dataframe,
    validate_records,
)

__version__ = "0.1.0"
__package_name__ = "ryandata-class-validator"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "create_validated",
    "validate_or_raise",
    "construct_from_validated_fields",
    # Registration
    "pipeline_for",
    "ClassPipelineBuilder",
    "FieldPipelineBuilder",
    "declare_field",
    "add_rule",
    "add_parser",
    "add_type_check_rule",
    "mark_optional",
    "mark_nullable",
    "validate_imperatively",
    # Registry and models
    "PipelineRegistry",
    "get_class_context",
    "get_or_create_class_context",
    "ClassPipelineContext",
    "FieldPipelineContext",
    "NamedParser",
    "NamedRule",
    "UNDEFINED",
    "is_undefined",
    # Results
    "Ok",
    "Err",
    "Result",
    "run_catching",
    # Errors
    "PACKAGE_NAME",
    "ClassValidatorUsageError",
    "RyanDataClassValidationError",
    # Configuration
    "ValidatorConfig",
    "get_default_config",
    "reset_default_config",
    # Integrations
    "ClassValidator",
    "create_class_validators",
    "register_accessor",
    "validate_dataframe",
    "validate_records",
]
