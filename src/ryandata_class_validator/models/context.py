"""Pipeline metadata accumulated per class and per field.

A :class:`ClassPipelineContext` maps field names to
:class:`FieldPipelineContext` objects in registration order. Both are built
once while classes are being set up and only read afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic_core import PydanticUndefined

# Marker for a value that is absent from the input mapping.
UNDEFINED = PydanticUndefined

RuleOutcome = Union[str, bool, None]
RuleTest = Callable[[Any], RuleOutcome]
ParseFunction = Callable[[Any], Any]

DEFAULT_RULE_NAME = "custom-rule"
DEFAULT_PARSER_NAME = "custom-parser"


def is_undefined(value: Any) -> bool:
    """Check whether ``value`` is the absent marker."""
    return value is UNDEFINED


@dataclass(frozen=True)
class NamedRule:
    """A rule stage: ``test(value)`` returns a message or no error.

    Rules built from their field context (such as the type check) keep the
    ``factory`` that made them so a copied context gets its own rule.
    """

    name: str
    test: RuleTest
    factory: Callable[[FieldPipelineContext], RuleTest] | None = None

    def rebind(self, context: FieldPipelineContext) -> NamedRule:
        """Return this rule for ``context``, rebuilding context-bound tests."""
        if self.factory is None:
            return self
        return NamedRule(self.name, self.factory(context), self.factory)


@dataclass(frozen=True)
class NamedParser:
    """A parser stage: ``parse(value)`` returns the transformed value or raises."""

    name: str
    parse: ParseFunction


@dataclass
class FieldPipelineContext:
    """Per-field pipeline state.

    Attributes:
        declared_type: Expected class of the field, or None until declared.
        parsers: Parsers in registration order.
        rules: Rules in registration order.
        allow_null: A ``None`` value skips rules and nested validation.
        allow_undefined: An absent value skips rules and nested validation.
    """

    declared_type: type | None = None
    parsers: list[NamedParser] = field(default_factory=list)
    rules: list[NamedRule] = field(default_factory=list)
    allow_null: bool = False
    allow_undefined: bool = False

    def copy(self) -> FieldPipelineContext:
        """Copy with independent stage lists.

        Context-bound rules are rebuilt so they read the copy's declared type.
        """
        clone = FieldPipelineContext(
            declared_type=self.declared_type,
            parsers=list(self.parsers),
            allow_null=self.allow_null,
            allow_undefined=self.allow_undefined,
        )
        clone.rules = [rule.rebind(clone) for rule in self.rules]
        return clone

    def describe(self) -> dict[str, Any]:
        """Summarize the pipeline as plain data (used by the CLI)."""
        return {
            "declared_type": self.declared_type.__name__ if self.declared_type else None,
            "allow_null": self.allow_null,
            "allow_undefined": self.allow_undefined,
            "parsers": [p.name for p in self.parsers],
            "rules": [r.name for r in self.rules],
        }


@dataclass
class ClassPipelineContext:
    """Ordered mapping of field name to :class:`FieldPipelineContext`."""

    owner: type
    fields: dict[str, FieldPipelineContext] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get_field(self, name: str) -> FieldPipelineContext | None:
        return self.fields.get(name)

    def get_or_create_field(self, name: str) -> FieldPipelineContext:
        """Return the field's context, creating an empty one on first use."""
        context = self.fields.get(name)
        if context is None:
            context = FieldPipelineContext()
            self.fields[name] = context
        return context

    def items(self) -> list[tuple[str, FieldPipelineContext]]:
        return list(self.fields.items())
