"""Two-variant outcome type shared by the engine and its collaborators.

A validation either produces ``Ok(instance)`` or ``Err(messages)``; never
both, never neither. Dataclasses keep the variants cheap to build and easy
to compare in tests (``assert result == Err([...])``).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ryandata_class_validator.core.errors import RyanDataClassValidationError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the produced value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self, target: type | None = None) -> T:
        """Return the carried value."""
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying the error payload.

    For validation results the payload is the ordered list of field error
    messages.
    """

    value: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self, target: type | None = None) -> Any:
        """Raise the error payload.

        Args:
            target: Class the validation was run against, used in the
                error message. Defaults to ``object``.

        Raises:
            RyanDataClassValidationError: Always. Non-list payloads are
                wrapped as a single message.
        """
        if isinstance(self.value, BaseException):
            raise self.value
        errors = self.value if isinstance(self.value, list) else [str(self.value)]
        raise RyanDataClassValidationError.from_errors(target or object, errors)

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Ok[T], Err[E]]


def run_catching(fn: Callable[[], T]) -> Result[T, Exception]:
    """Call ``fn`` and capture its return value or raised exception.

    Only ``Exception`` subclasses are captured; ``KeyboardInterrupt`` and
    friends propagate.
    """
    try:
        return Ok(fn())
    except Exception as exc:
        return Err(exc)
