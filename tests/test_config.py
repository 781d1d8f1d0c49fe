from __future__ import annotations

import logging

import pytest

from ryandata_class_validator import (
    ValidatorConfig,
    create_validated,
    get_default_config,
    pipeline_for,
    reset_default_config,
)


class TestValidatorConfig:
    """Configuration defaults come from the environment."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "RYANDATA_VALIDATOR_COPY_UNDECLARED",
            "RYANDATA_VALIDATOR_REVALIDATE_INSTANCES",
            "RYANDATA_VALIDATOR_LOG_FAILURES",
        ):
            monkeypatch.delenv(name, raising=False)

        config = ValidatorConfig()

        assert config.copy_undeclared_fields is True
        assert config.revalidate_instances is True
        assert config.log_failures is False

    @pytest.mark.parametrize("raw", ["0", "false", "No"])
    def test_env_disables_flag(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATOR_COPY_UNDECLARED", raw)

        assert ValidatorConfig().copy_undeclared_fields is False

    def test_env_enables_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATOR_LOG_FAILURES", "1")

        assert ValidatorConfig().log_failures is True

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATOR_REVALIDATE_INSTANCES", "0")

        assert ValidatorConfig(revalidate_instances=True).revalidate_instances is True


class TestDefaultConfig:
    def test_is_cached(self) -> None:
        assert get_default_config() is get_default_config()

    def test_reset_rereads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATOR_COPY_UNDECLARED", "1")
        first = get_default_config()
        monkeypatch.setenv("RYANDATA_VALIDATOR_COPY_UNDECLARED", "0")
        reset_default_config()

        second = get_default_config()

        assert first is not second
        assert second.copy_undeclared_fields is False

    def test_engine_uses_default_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class Item:
            name: str

        pipeline_for(Item).field("name", str).type_check()
        monkeypatch.setenv("RYANDATA_VALIDATOR_COPY_UNDECLARED", "0")
        reset_default_config()

        item = create_validated(Item, {"name": "x", "extra": 1}).unwrap()

        assert not hasattr(item, "extra")


def test_failures_are_logged_when_enabled(caplog: pytest.LogCaptureFixture) -> None:
    class Item:
        name: str

    pipeline_for(Item).field("name", str).type_check()

    with caplog.at_level(logging.INFO, logger="ryandata_class_validator.pipeline.engine"):
        create_validated(Item, {}, config=ValidatorConfig(log_failures=True))

    assert "Validation of" in caplog.text
    assert "1 error(s)" in caplog.text


def test_failures_are_not_logged_by_default(caplog: pytest.LogCaptureFixture) -> None:
    class Item:
        name: str

    pipeline_for(Item).field("name", str).type_check()

    with caplog.at_level(logging.INFO, logger="ryandata_class_validator.pipeline.engine"):
        create_validated(Item, {}, config=ValidatorConfig(log_failures=False))

    assert "Validation of" not in caplog.text
