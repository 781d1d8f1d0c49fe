"""Stateful property-based tests using Hypothesis for pipeline registration.

This module contains stateful tests using Hypothesis's RuleBasedStateMachine
to check that arbitrary sequences of registrations produce the errors a
simple model of the pipeline predicts.
"""

from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import HealthCheck, settings
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from ryandata_class_validator import (
    UNDEFINED,
    PipelineRegistry,
    add_rule,
    create_validated,
    declare_field,
    mark_optional,
)

FIELDS = ["alpha", "beta", "gamma"]
LABELS = ["check-a", "check-b", "check-c"]


def failing_rule(label: str):
    def test(value: object) -> str:
        return f"{label} failed on {value!r}"

    return test


class PipelineRegistrationStateMachine(RuleBasedStateMachine):
    """State machine for testing registration against validation results.

    Each run registers stages on a fresh class and validates records
    against it, comparing the reported errors with a model of the
    expected field order, rule order and presence flags.
    """

    def __init__(self) -> None:
        super().__init__()

        class Target:
            pass

        self.target = Target
        self.field_order: list[str] = []
        self.rules: dict[str, list[tuple[str, bool]]] = {}
        self.optional: set[str] = set()

    def _touch(self, field: str) -> None:
        if field not in self.field_order:
            self.field_order.append(field)
            self.rules[field] = []

    # =========================================================================
    # Registration rules
    # =========================================================================

    @rule(field=st.sampled_from(FIELDS))
    def declare(self, field: str) -> None:
        """Declare a field without stages."""
        declare_field(self.target, field, int)
        self._touch(field)

    @rule(field=st.sampled_from(FIELDS), label=st.sampled_from(LABELS), fails=st.booleans())
    def register_rule(self, field: str, label: str, fails: bool) -> None:
        """Append a rule that always passes or always fails."""
        test = failing_rule(label) if fails else (lambda value: None)
        add_rule(self.target, field, test, label)
        self._touch(field)
        self.rules[field].append((label, fails))

    @rule(field=st.sampled_from(FIELDS))
    def make_optional(self, field: str) -> None:
        """Mark a field optional."""
        mark_optional(self.target, field)
        self._touch(field)
        self.optional.add(field)

    # =========================================================================
    # Validation rules
    # =========================================================================

    @rule(
        data=st.dictionaries(
            st.sampled_from(FIELDS), st.integers(min_value=0, max_value=9), max_size=3
        )
    )
    def validate(self, data: dict[str, int]) -> None:
        """Validate a record and compare with the model."""
        if not self.field_order:
            return

        expected: list[str] = []
        for field in self.field_order:
            value = data.get(field, UNDEFINED)
            if field in self.optional and value is UNDEFINED:
                continue
            for label, fails in self.rules[field]:
                if fails:
                    expected.append(f"{label}({field}): {label} failed on {value!r}")

        result = create_validated(self.target, data)

        if expected:
            assert result.is_err()
            assert result.value == expected
        else:
            assert result.is_ok()
            for field in self.field_order:
                assert getattr(result.value, field) == data.get(field, UNDEFINED)

    @invariant()
    def registry_matches_model(self) -> None:
        """Registered fields should follow first-registration order."""
        context = PipelineRegistry.get(self.target)
        if context is None:
            assert self.field_order == []
            return
        assert list(context) == self.field_order
        for field in self.field_order:
            names = [named.name for named in context.get_field(field).rules]
            assert names == [label for label, _ in self.rules[field]]
            assert context.get_field(field).allow_undefined == (field in self.optional)

    def teardown(self) -> None:
        PipelineRegistry.unregister(self.target)


# Create pytest test case
TestPipelineRegistration = PipelineRegistrationStateMachine.TestCase
TestPipelineRegistration.settings = settings(
    max_examples=50,
    stateful_step_count=15,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
