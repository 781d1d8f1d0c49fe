"""Built-in parsers.

A parser receives the field's current value and returns the transformed
value, raising ``ValueError`` when the value cannot be converted. The
engine turns the exception message into a field error such as
``to-int(age): Cannot convert `"abc"` to int``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ryandata_class_validator.models.context import UNDEFINED, ParseFunction
from ryandata_class_validator.validation.rules import render_value, stage_name

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off"}


@stage_name("strip-whitespace")
def strip_whitespace(value: Any) -> Any:
    """Strip surrounding whitespace from strings; other values pass through."""
    if isinstance(value, str):
        return value.strip()
    return value


@stage_name("empty-to-none")
def empty_to_none(value: Any) -> Any:
    """Turn blank strings into None."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


@stage_name("undefined-to-none")
def undefined_to_none(value: Any) -> Any:
    """Turn an absent value into None, for fields that are nullable but not optional."""
    if value is UNDEFINED:
        return None
    return value


@stage_name("to-int")
def to_int(value: Any) -> int:
    """Convert integral numbers and numeric strings to ``int``."""
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert `{render_value(value)}` to int")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"Cannot convert `{render_value(value)}` to int") from None
    raise ValueError(f"Cannot convert `{render_value(value)}` to int")


@stage_name("to-float")
def to_float(value: Any) -> float:
    """Convert numbers and numeric strings to ``float``."""
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert `{render_value(value)}` to float")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ValueError(f"Cannot convert `{render_value(value)}` to float") from None
    raise ValueError(f"Cannot convert `{render_value(value)}` to float")


@stage_name("to-bool")
def to_bool(value: Any) -> bool:
    """Convert booleans and common truthy/falsy strings to ``bool``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"Cannot convert `{render_value(value)}` to bool")


def with_default(default: Any) -> ParseFunction:
    """Replace an absent value with ``default``."""

    @stage_name("with-default")
    def parse(value: Any) -> Any:
        if value is UNDEFINED:
            return default
        return value

    return parse


def each(parse: ParseFunction) -> ParseFunction:
    """Apply ``parse`` to every item of a list.

    The first failing item raises with its index prefixed, e.g.
    ``[2] Cannot convert `"x"` to int``.
    """

    @stage_name(f"each-{getattr(parse, '__name__', 'item')}")
    def parse_items(value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Expected a list, but got `{render_value(value)}`")
        parsed = []
        for index, item in enumerate(value):
            try:
                parsed.append(parse(item))
            except Exception as exc:
                raise ValueError(f"[{index}] {exc}") from exc
        return parsed

    return parse_items


def list_of(target: type) -> ParseFunction:
    """Validate every item of a list as an instance of ``target``.

    All item errors are reported together, each prefixed with its index:
    ``list-of-Pet(pets): [1] validate-design-type(name): ...``.
    """
    from ryandata_class_validator.pipeline.engine import create_validated

    @stage_name(f"list-of-{target.__name__}")
    def parse(value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Expected a list, but got `{render_value(value)}`")
        instances = []
        errors: list[str] = []
        for index, item in enumerate(value):
            if not isinstance(item, (Mapping, target)):
                errors.append(
                    f"[{index}] Expected `{target.__name__}`, but got `{render_value(item)}`"
                )
                continue
            result = create_validated(target, item)
            if result.is_err():
                errors.extend(f"[{index}] {error}" for error in result.value)
            else:
                instances.append(result.value)
        if errors:
            raise ValueError("; ".join(errors))
        return instances

    return parse
