"""Validation engine.

:func:`create_validated` walks input data against a class's registered
pipelines and either builds a fresh instance of the class or returns every
error found. Per field, in registration order:

1. read the value (``UNDEFINED`` when missing),
2. run parsers in order; the first failure ends the field,
3. skip the rest when the value is None and the field is nullable, or
   absent and the field is optional,
4. recurse when the declared type is itself a validated class,
5. otherwise run every rule.

Field errors are collected, never raised. Usage errors (non-mapping input,
class without pipelines) raise :class:`ClassValidatorUsageError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from ryandata_class_validator.config import ValidatorConfig, get_default_config
from ryandata_class_validator.core.errors import ClassValidatorUsageError
from ryandata_class_validator.core.registry import PipelineRegistry
from ryandata_class_validator.core.results import Err, Ok, Result, run_catching
from ryandata_class_validator.models.context import (
    UNDEFINED,
    FieldPipelineContext,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

NESTED_STAGE_NAME = "validate-nested-class"


def _read_data(target: type, data: Any) -> dict[str, Any]:
    if isinstance(data, Mapping):
        return dict(data)
    if isinstance(data, target) and hasattr(data, "__dict__"):
        return dict(vars(data))
    raise ClassValidatorUsageError("The passed `data` is not an object.")


def _failure_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _rule_message(outcome: Any, rule_name: str) -> str | None:
    if outcome is None or isinstance(outcome, bool):
        return None
    if isinstance(outcome, str):
        return outcome or None
    raise ClassValidatorUsageError(
        f"Rule `{rule_name}` returned {type(outcome).__name__}; "
        "expected a message, None or a bool."
    )


def _can_recurse(value: Any, declared_type: type, config: ValidatorConfig) -> bool:
    if isinstance(value, Mapping):
        return True
    return (
        config.revalidate_instances
        and isinstance(value, declared_type)
        and hasattr(value, "__dict__")
    )


def _run_field(
    field_name: str,
    context: FieldPipelineContext,
    values: dict[str, Any],
    config: ValidatorConfig,
) -> list[str]:
    value = values.get(field_name, UNDEFINED)

    for parser in context.parsers:
        result = run_catching(lambda: parser.parse(value))  # noqa: B023
        if isinstance(result, Err):
            logger.debug("Parser %s failed for field %s", parser.name, field_name)
            return [f"{parser.name}({field_name}): {_failure_message(result.value)}"]
        value = result.value
        values[field_name] = value

    if context.allow_null and value is None:
        return []
    if context.allow_undefined and value is UNDEFINED:
        return []

    declared_type = context.declared_type
    if (
        declared_type is not None
        and PipelineRegistry.is_registered(declared_type)
        and _can_recurse(value, declared_type, config)
    ):
        nested = create_validated(declared_type, value, config=config)
        if isinstance(nested, Err):
            return [f"{NESTED_STAGE_NAME}({field_name}): {error}" for error in nested.value]
        values[field_name] = nested.value
        return []

    errors: list[str] = []
    for rule in context.rules:
        outcome = run_catching(lambda: rule.test(value))  # noqa: B023
        if isinstance(outcome, Err):
            if isinstance(outcome.value, ClassValidatorUsageError):
                raise outcome.value
            logger.debug("Rule %s raised for field %s", rule.name, field_name)
            errors.append(f"{rule.name}({field_name}): {_failure_message(outcome.value)}")
            continue
        message = _rule_message(outcome.value, rule.name)
        if message:
            logger.debug("Rule %s failed for field %s", rule.name, field_name)
            errors.append(f"{rule.name}({field_name}): {message}")
    return errors


def _can_hold_attribute(target: type, name: Any) -> bool:
    # Instances of fully slotted classes only accept their slot names.
    for klass in target.__mro__:
        if klass is object:
            continue
        slots = klass.__dict__.get("__slots__")
        if slots is None:
            return True
        if isinstance(slots, str):
            slots = (slots,)
        if name in slots or "__dict__" in slots:
            return True
    return False


def construct_from_validated_fields(target: type[T], values: Mapping[str, Any]) -> T:
    """Build an instance of ``target`` from already validated values.

    ``target.__init__`` is intentionally not called: the instance is
    allocated with ``__new__`` and every value is assigned directly, which
    also works for frozen dataclasses.

    Args:
        target: Class to instantiate.
        values: Attribute names and their final values. Non-string keys
            are skipped.

    Returns:
        The new instance.
    """
    instance = target.__new__(target)
    for name, value in values.items():
        if isinstance(name, str):
            object.__setattr__(instance, name, value)
    return instance


def create_validated(
    target: type[T],
    data: Any,
    *,
    config: ValidatorConfig | None = None,
) -> Result[T, list[str]]:
    """Validate ``data`` against ``target``'s pipelines and build an instance.

    Args:
        target: Class with registered pipelines.
        data: Mapping of field values (typically parsed JSON), or an existing
            instance of ``target`` whose attributes are re-validated.
        config: Engine configuration. Defaults to :func:`get_default_config`.

    Returns:
        ``Ok(instance)`` when every field passes, otherwise ``Err`` with all
        error messages in field order.

    Raises:
        ClassValidatorUsageError: If ``data`` is not a mapping or ``target``
            has no registered pipelines.
    """
    config = config or get_default_config()
    values = _read_data(target, data)

    class_context = PipelineRegistry.get(target)
    if class_context is None:
        raise ClassValidatorUsageError("This class contains no validation.")

    errors: list[str] = []
    for field_name, field_context in class_context.items():
        errors.extend(_run_field(field_name, field_context, values, config))

    if errors:
        if config.log_failures:
            logger.info(
                "Validation of %s failed with %d error(s)", target.__qualname__, len(errors)
            )
        return Err(errors)

    if config.copy_undeclared_fields:
        final_values = {
            name: value
            for name, value in values.items()
            if name in class_context or _can_hold_attribute(target, name)
        }
    else:
        final_values = {name: values[name] for name in class_context if name in values}
    for field_name in class_context:
        final_values.setdefault(field_name, UNDEFINED)

    return Ok(construct_from_validated_fields(target, final_values))


def validate_or_raise(
    target: type[T],
    data: Any,
    *,
    config: ValidatorConfig | None = None,
) -> T:
    """Like :func:`create_validated` but return the instance or raise.

    Raises:
        RyanDataClassValidationError: If any field fails validation.
        ClassValidatorUsageError: On API misuse.
    """
    return create_validated(target, data, config=config).unwrap(target)
