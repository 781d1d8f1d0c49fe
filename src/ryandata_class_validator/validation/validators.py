from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from abstract_validation_base import (
    BaseValidator,
    CompositeValidator,
    ValidationResult,
    ValidatorPipelineBuilder,
)

from ryandata_class_validator.pipeline.engine import create_validated

_FIELD_PATTERN = re.compile(r"^[^()]+\((?P<field>[^()]*)\): ")


def field_of(message: str) -> str:
    """Extract the top-level field name from an error message.

    ``validate-nested-class(wallet): validate-design-type(amount): ...``
    yields ``wallet``.
    """
    match = _FIELD_PATTERN.match(message)
    return match.group("field") if match else ""


class ClassValidator(BaseValidator[Mapping[str, Any]]):
    """Validates mappings against a class's registered pipelines.

    Lets validated classes take part in ``abstract_validation_base``
    pipelines next to hand-written validators.
    """

    def __init__(self, target: type) -> None:
        """Initialize the validator.

        Args:
            target: Class with registered pipelines.
        """
        self._target = target

    @property
    def name(self) -> str:
        """Name of this validator."""
        return self._target.__name__

    @property
    def target(self) -> type:
        return self._target

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate one mapping.

        Args:
            data: Input data for the target class.

        Returns:
            ValidationResult with one error per field error message.
        """
        result = ValidationResult(is_valid=True)
        outcome = create_validated(self._target, data)
        if outcome.is_err():
            for message in outcome.value:
                field = field_of(message)
                result.add_error(
                    field,
                    message,
                    data.get(field) if field and isinstance(data, Mapping) else None,
                )
        return result


def create_class_validators(*targets: type) -> CompositeValidator[Mapping[str, Any]]:
    """Compose class validators for the same input into one pipeline.

    Args:
        *targets: Classes the input must satisfy, in reporting order.

    Returns:
        CompositeValidator running each class validator.
    """
    builder: ValidatorPipelineBuilder[Mapping[str, Any]] = ValidatorPipelineBuilder(
        "class_validation"
    )
    for target in targets:
        builder.add(ClassValidator(target))
    return builder.build()
