"""Built-in rules, parsers and validator adapters."""

from ryandata_class_validator.validation.parsers import (
    each,
    empty_to_none,
    list_of,
    strip_whitespace,
    to_bool,
    to_float,
    to_int,
    undefined_to_none,
    with_default,
)
from ryandata_class_validator.validation.rules import (
    DESIGN_TYPE_RULE_NAME,
    design_type_rule,
    matches,
    matches_declared_type,
    max_length,
    max_value,
    min_length,
    min_value,
    one_of,
    render_value,
    stage_name,
)
from ryandata_class_validator.validation.validators import (
    ClassValidator,
    create_class_validators,
    field_of,
)

__all__ = [
    # Rules
    "DESIGN_TYPE_RULE_NAME",
    "design_type_rule",
    "matches",
    "matches_declared_type",
    "max_length",
    "max_value",
    "min_length",
    "min_value",
    "one_of",
    "render_value",
    "stage_name",
    # Parsers
    "each",
    "empty_to_none",
    "list_of",
    "strip_whitespace",
    "to_bool",
    "to_float",
    "to_int",
    "undefined_to_none",
    "with_default",
    # Validator adapters
    "ClassValidator",
    "create_class_validators",
    "field_of",
]
