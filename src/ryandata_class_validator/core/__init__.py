"""Registry, result type and errors shared by the rest of the package.

Usage:
    from ryandata_class_validator.core import (
        # Registry
        PipelineRegistry,
        # Results
        Ok,
        Err,
        Result,
        run_catching,
        # Errors
        ClassValidatorUsageError,
        RyanDataClassValidationError,
    )
"""

from __future__ import annotations

from ryandata_class_validator.core.errors import (
    PACKAGE_NAME,
    ClassValidatorUsageError,
    RyanDataClassValidationError,
)
from ryandata_class_validator.core.registry import (
    PipelineRegistry,
    get_class_context,
    get_or_create_class_context,
)
from ryandata_class_validator.core.results import Err, Ok, Result, run_catching

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "ClassValidatorUsageError",
    "RyanDataClassValidationError",
    # Registry
    "PipelineRegistry",
    "get_class_context",
    "get_or_create_class_context",
    # Results
    "Err",
    "Ok",
    "Result",
    "run_catching",
]
