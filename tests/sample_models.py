"""Validated classes shared by several test modules.

Importing this module registers the pipelines, the same way application
code registers them at import time.
"""

from __future__ import annotations

from ryandata_class_validator import pipeline_for
from ryandata_class_validator.validation import min_length, min_value, strip_whitespace


class Wallet:
    amount: int

    def __init__(self, amount: int = 0) -> None:
        raise RuntimeError("Validated instances must not call __init__")


class Person:
    name: str
    age: int
    wallet: Wallet


PERSON_FIELDS = ("name", "age", "wallet")


class Plain:
    """A class without any registered validation."""

    value: int


(
    pipeline_for(Wallet)
    .field("amount", int)
    .type_check()
    .rule(min_value(0))
)

(
    pipeline_for(Person)
    .field("name", str)
    .parser(strip_whitespace)
    .type_check()
    .rule(min_length(1))
    .field("age", int)
    .type_check()
    .field("wallet", Wallet)
    .type_check()
    .optional()
)
