"""Built-in rules.

Every rule is a plain ``test(value)`` callable returning None when the value
passes and a message otherwise. Factories name the returned function in
kebab-case so the name shows up as the stage in error messages, e.g.
``min-value(age): Expected a value >= 18, but got `12```.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Sized
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic_core import PydanticSerializationError, to_json

from ryandata_class_validator.core.errors import ClassValidatorUsageError
from ryandata_class_validator.models.context import UNDEFINED, RuleTest

if TYPE_CHECKING:
    from ryandata_class_validator.models.context import FieldPipelineContext

DESIGN_TYPE_RULE_NAME = "validate-design-type"

F = TypeVar("F", bound=Callable[..., Any])


def stage_name(name: str) -> Callable[[F], F]:
    """Give a rule or parser function the stage name used in error messages."""

    def decorate(fn: F) -> F:
        fn.__name__ = name
        return fn

    return decorate


def _json_fallback(value: Any) -> Any:
    if hasattr(value, "__dict__"):
        return vars(value)
    return str(value)


def render_value(value: Any) -> str:
    """Render a value the way it appears inside error messages.

    Compact JSON, with ``undefined`` for the absent marker and ``null`` for
    None. Values JSON cannot represent fall back to ``repr``.
    """
    if value is UNDEFINED:
        return "undefined"
    try:
        return to_json(value, fallback=_json_fallback).decode()
    except (PydanticSerializationError, ValueError, TypeError):
        return repr(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def matches_declared_type(value: Any, declared_type: type) -> bool:
    """Check a value against a declared type.

    None and the absent marker never match. ``bool`` does not count as a
    number, while an ``int`` is accepted where ``float`` is declared.
    """
    if value is None or value is UNDEFINED:
        return False
    if declared_type in (int, float) and isinstance(value, bool):
        return False
    if declared_type is float and isinstance(value, int):
        return True
    return type(value) is declared_type or isinstance(value, declared_type)


def design_type_rule(field_context: FieldPipelineContext) -> RuleTest:
    """Create the type-check rule for one field.

    The declared type is read from the field context when the rule runs,
    so the rule may be registered before the type is declared.
    """

    @stage_name(DESIGN_TYPE_RULE_NAME)
    def test(value: Any) -> str | None:
        declared_type = field_context.declared_type
        if declared_type is None:
            raise ClassValidatorUsageError(
                "The type-check rule needs a declared type for its field."
            )
        if not matches_declared_type(value, declared_type):
            return f"Expected `{declared_type.__name__}`, but got `{render_value(value)}`"
        return None

    return test


def min_value(minimum: float) -> RuleTest:
    @stage_name("min-value")
    def test(value: Any) -> str | None:
        if not _is_number(value):
            return f"Expected a number, but got `{render_value(value)}`"
        if value < minimum:
            return f"Expected a value >= {minimum}, but got `{render_value(value)}`"
        return None

    return test


def max_value(maximum: float) -> RuleTest:
    @stage_name("max-value")
    def test(value: Any) -> str | None:
        if not _is_number(value):
            return f"Expected a number, but got `{render_value(value)}`"
        if value > maximum:
            return f"Expected a value <= {maximum}, but got `{render_value(value)}`"
        return None

    return test


def min_length(minimum: int) -> RuleTest:
    @stage_name("min-length")
    def test(value: Any) -> str | None:
        if not isinstance(value, Sized):
            return f"Expected a value with a length, but got `{render_value(value)}`"
        if len(value) < minimum:
            return f"Expected a length >= {minimum}, but got {len(value)}"
        return None

    return test


def max_length(maximum: int) -> RuleTest:
    @stage_name("max-length")
    def test(value: Any) -> str | None:
        if not isinstance(value, Sized):
            return f"Expected a value with a length, but got `{render_value(value)}`"
        if len(value) > maximum:
            return f"Expected a length <= {maximum}, but got {len(value)}"
        return None

    return test


def matches(pattern: str | re.Pattern[str]) -> RuleTest:
    """Require a string that fully matches ``pattern``."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    @stage_name("matches-pattern")
    def test(value: Any) -> str | None:
        if not isinstance(value, str) or compiled.fullmatch(value) is None:
            return (
                f"Expected a string matching `{compiled.pattern}`, "
                f"but got `{render_value(value)}`"
            )
        return None

    return test


def one_of(choices: Collection[Any]) -> RuleTest:
    allowed = list(choices)

    @stage_name("one-of")
    def test(value: Any) -> str | None:
        if value not in allowed:
            return f"Expected one of `{render_value(allowed)}`, but got `{render_value(value)}`"
        return None

    return test
