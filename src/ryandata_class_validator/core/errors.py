"""Error classes with package identification.

Two disjoint kinds of failure exist:

- Usage errors (:class:`ClassValidatorUsageError`) signal a programming or
  configuration mistake and abort the call that hit them.
- Field validation errors are plain strings collected into an ``Err`` result.
  :class:`RyanDataClassValidationError` is their raised form, used when a
  caller asks for an instance or an exception.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "ryandata_class_validator"


class ClassValidatorUsageError(TypeError):
    """Raised when the validation API itself is misused.

    Examples are passing a non-mapping as input data, validating a class
    that has no registered pipeline, or a rule returning something other
    than a message.
    """


class RyanDataClassValidationError(PydanticCustomError):
    """Raised form of a failed validation.

    Inherits from PydanticCustomError so it can be raised from inside
    pydantic validators and is reported with the package context attached.
    """

    @classmethod
    def from_errors(
        cls,
        target: type,
        errors: Sequence[str],
        context: dict | None = None,
    ) -> RyanDataClassValidationError:
        """Build the error for a list of field error messages.

        Args:
            target: The class that failed to validate.
            errors: Field error messages in reporting order.
            context: Additional context to include.

        Returns:
            RyanDataClassValidationError whose message joins all errors.
        """
        ctx = {
            "package": PACKAGE_NAME,
            "class": target.__name__,
            "errors": list(errors),
            **(context or {}),
        }
        return cls(
            "class_validation",
            f"Validation of `{target.__name__}` failed: {'; '.join(errors)}",
            ctx,
        )

    @property
    def errors(self) -> list[str]:
        """Field error messages carried by this error."""
        return list((self.context or {}).get("errors", []))
