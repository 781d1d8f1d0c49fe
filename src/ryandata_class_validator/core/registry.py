"""Process-wide registry of class pipelines.

Maps class identity to its :class:`ClassPipelineContext`. Registration
happens while classes are being set up (usually at import time) and must
complete before any validation reads the registry for that class.
Concurrent registration and validation of the same class is undefined
behaviour; no locking is done here.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from ryandata_class_validator.models.context import ClassPipelineContext

logger = logging.getLogger(__name__)


class PipelineRegistry:
    """Class-level registry with get-or-create semantics.

    Example:
        >>> context = PipelineRegistry.get_or_create(Person)
        >>> PipelineRegistry.get(Person) is context
        True
    """

    _registry: ClassVar[dict[type, ClassPipelineContext]] = {}

    @classmethod
    def get_or_create(cls, target: type) -> ClassPipelineContext:
        """Return the context registered for ``target``, creating it if needed.

        A new context starts with copies of the field pipelines inherited
        from registered base classes, bases first.

        Args:
            target: Class whose pipeline is requested.

        Returns:
            The class's own pipeline context.
        """
        context = cls._registry.get(target)
        if context is not None:
            return context

        context = ClassPipelineContext(owner=target)
        for base in reversed(target.__mro__[1:]):
            inherited = cls._registry.get(base)
            if inherited is None:
                continue
            for name, field_context in inherited.fields.items():
                context.fields[name] = field_context.copy()

        cls._registry[target] = context
        logger.debug(
            "Created pipeline context for %s (%d inherited fields)",
            target.__qualname__,
            len(context),
        )
        return context

    @classmethod
    def get(cls, target: object) -> ClassPipelineContext | None:
        """Read-only lookup.

        Falls back to the nearest registered ancestor so unregistered
        subclasses validate with their parent's pipeline.

        Returns:
            The context, or None when neither the class nor any of its
            bases declares validation.
        """
        if not isinstance(target, type):
            return None
        for klass in target.__mro__:
            context = cls._registry.get(klass)
            if context is not None:
                return context
        return None

    @classmethod
    def is_registered(cls, target: object) -> bool:
        return cls.get(target) is not None

    @classmethod
    def registered_classes(cls) -> list[type]:
        """Classes with their own registered context, in registration order."""
        return list(cls._registry)

    @classmethod
    def unregister(cls, target: type) -> None:
        """Drop the context registered directly on ``target``."""
        cls._registry.pop(target, None)

    @classmethod
    def clear_registry(cls) -> None:
        """Clear the registry (mainly for testing)."""
        cls._registry.clear()


def get_or_create_class_context(target: type) -> ClassPipelineContext:
    return PipelineRegistry.get_or_create(target)


def get_class_context(target: object) -> ClassPipelineContext | None:
    return PipelineRegistry.get(target)
