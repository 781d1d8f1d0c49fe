from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str = "1") -> bool:
    value = os.getenv(name, default)
    return value.lower() not in {"0", "false", "no"}


@dataclass(frozen=True)
class ValidatorConfig:
    """Configuration for the validation engine.

    Defaults are read from the environment when an instance is created.
    """

    copy_undeclared_fields: bool = field(
        default_factory=lambda: _env_flag("RYANDATA_VALIDATOR_COPY_UNDECLARED", "1")
    )
    revalidate_instances: bool = field(
        default_factory=lambda: _env_flag("RYANDATA_VALIDATOR_REVALIDATE_INSTANCES", "1")
    )
    log_failures: bool = field(
        default_factory=lambda: _env_flag("RYANDATA_VALIDATOR_LOG_FAILURES", "0")
    )


_default_config: ValidatorConfig | None = None


def get_default_config() -> ValidatorConfig:
    """Get or create the shared default configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ValidatorConfig()
    return _default_config


def reset_default_config() -> None:
    """Forget the cached default so the environment is read again."""
    global _default_config
    _default_config = None
