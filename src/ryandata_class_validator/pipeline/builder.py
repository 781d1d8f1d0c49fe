"""Registration API for field pipelines.

Two equivalent surfaces append stages to a field's pipeline:

- Functional primitives addressed by ``(cls, field_name)``:
  :func:`declare_field`, :func:`add_rule`, :func:`add_parser`,
  :func:`mark_optional`, :func:`mark_nullable` and
  :func:`add_type_check_rule`.
- A fluent builder started with :func:`pipeline_for`.

Example:
    >>> class Person:
    ...     name: str
    ...     age: int
    >>> (
    ...     pipeline_for(Person)
    ...     .field("name", str)
    ...     .type_check()
    ...     .field("age", int)
    ...     .type_check()
    ...     .rule(lambda age: age >= 18 or "Min Age 18")
    ... )

Registration is expected to run once per class during setup, before the
class is validated.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Self

from ryandata_class_validator.core.registry import PipelineRegistry
from ryandata_class_validator.models.context import (
    DEFAULT_PARSER_NAME,
    DEFAULT_RULE_NAME,
    ClassPipelineContext,
    FieldPipelineContext,
    NamedParser,
    NamedRule,
    ParseFunction,
    RuleTest,
)
from ryandata_class_validator.validation.rules import design_type_rule


def _stage_name(fn: Callable[..., Any], explicit: str | None, default: str) -> str:
    if explicit:
        return explicit
    name = getattr(fn, "__name__", "")
    if not name or name == "<lambda>":
        return default
    return name


def _field_context(target: type, field_name: str) -> FieldPipelineContext:
    return PipelineRegistry.get_or_create(target).get_or_create_field(field_name)


def declare_field(
    target: type, field_name: str, declared_type: type | None = None
) -> FieldPipelineContext:
    """Ensure a pipeline exists for the field.

    Idempotent: a declared type that is already recorded is kept.

    Args:
        target: Class owning the field.
        field_name: Attribute name of the field.
        declared_type: Expected class of the field's value.

    Returns:
        The field's pipeline context.
    """
    context = _field_context(target, field_name)
    if context.declared_type is None and declared_type is not None:
        context.declared_type = declared_type
    return context


def add_rule(
    target: type, field_name: str, test: RuleTest, rule_name: str | None = None
) -> FieldPipelineContext:
    """Append a rule to the field's pipeline.

    Only a non-empty string is an error. ``True`` passes just like
    ``False``, so ``lambda v: v >= 18 or "Min Age 18"`` works; a rule
    that signals failure by returning a truthy non-string value is not
    supported and raises :class:`ClassValidatorUsageError`. Exceptions
    raised by ``test`` are reported as the rule's error message.

    Args:
        target: Class owning the field.
        field_name: Attribute name of the field.
        test: Callable receiving the current value; returns None, ``""``,
            False or True for no error, or a non-empty message.
        rule_name: Stage name used in messages. Defaults to the function
            name, or ``custom-rule`` for lambdas.
    """
    context = _field_context(target, field_name)
    context.rules.append(NamedRule(_stage_name(test, rule_name, DEFAULT_RULE_NAME), test))
    return context


def add_parser(
    target: type, field_name: str, parse: ParseFunction, parser_name: str | None = None
) -> FieldPipelineContext:
    """Append a parser to the field's pipeline.

    Args:
        target: Class owning the field.
        field_name: Attribute name of the field.
        parse: Callable receiving the current, possibly already parsed,
            value and returning the new one. Raising marks the field invalid.
        parser_name: Stage name used in messages. Defaults to the function
            name, or ``custom-parser`` for lambdas.
    """
    context = _field_context(target, field_name)
    context.parsers.append(
        NamedParser(_stage_name(parse, parser_name, DEFAULT_PARSER_NAME), parse)
    )
    return context


def mark_optional(target: type, field_name: str) -> FieldPipelineContext:
    """Let an absent value skip rules and nested validation."""
    context = _field_context(target, field_name)
    context.allow_undefined = True
    return context


def mark_nullable(target: type, field_name: str) -> FieldPipelineContext:
    """Let a None value skip rules and nested validation."""
    context = _field_context(target, field_name)
    context.allow_null = True
    return context


def add_type_check_rule(target: type, field_name: str) -> FieldPipelineContext:
    """Append the ``validate-design-type`` rule to the field's pipeline."""
    context = _field_context(target, field_name)
    test = design_type_rule(context)
    context.rules.append(NamedRule(test.__name__, test, design_type_rule))
    return context


def validate_imperatively(
    target: type,
    field_name: str,
    visit: Callable[[FieldPipelineContext, ClassPipelineContext], None],
) -> FieldPipelineContext:
    """Hand the field and class contexts to ``visit`` for direct edits."""
    context = _field_context(target, field_name)
    visit(context, PipelineRegistry.get_or_create(target))
    return context


class FieldPipelineBuilder:
    """Fluent builder for one field's pipeline.

    Each method registers immediately; there is no separate build step.
    """

    def __init__(self, owner: ClassPipelineBuilder, field_name: str) -> None:
        self._owner = owner
        self._field_name = field_name

    @property
    def name(self) -> str:
        return self._field_name

    @property
    def context(self) -> FieldPipelineContext:
        return _field_context(self._owner.target, self._field_name)

    def declare(self, declared_type: type) -> Self:
        """Record the field's declared type (kept if already set)."""
        declare_field(self._owner.target, self._field_name, declared_type)
        return self

    def rule(self, test: RuleTest, name: str | None = None) -> Self:
        add_rule(self._owner.target, self._field_name, test, name)
        return self

    def parser(self, parse: ParseFunction, name: str | None = None) -> Self:
        add_parser(self._owner.target, self._field_name, parse, name)
        return self

    def optional(self) -> Self:
        mark_optional(self._owner.target, self._field_name)
        return self

    def nullable(self) -> Self:
        mark_nullable(self._owner.target, self._field_name)
        return self

    def type_check(self) -> Self:
        add_type_check_rule(self._owner.target, self._field_name)
        return self

    def visit(
        self, visit: Callable[[FieldPipelineContext, ClassPipelineContext], None]
    ) -> Self:
        validate_imperatively(self._owner.target, self._field_name, visit)
        return self

    def field(self, field_name: str, declared_type: type | None = None) -> FieldPipelineBuilder:
        """Continue with another field of the same class."""
        return self._owner.field(field_name, declared_type)


class ClassPipelineBuilder:
    """Entry point of the fluent registration API for one class."""

    def __init__(self, target: type) -> None:
        self.target = target

    @property
    def context(self) -> ClassPipelineContext:
        return PipelineRegistry.get_or_create(self.target)

    def field(self, field_name: str, declared_type: type | None = None) -> FieldPipelineBuilder:
        """Start (or resume) registering stages for ``field_name``."""
        declare_field(self.target, field_name, declared_type)
        return FieldPipelineBuilder(self, field_name)


def pipeline_for(target: type) -> ClassPipelineBuilder:
    """Start registering pipelines for ``target``'s fields."""
    return ClassPipelineBuilder(target)
