# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Runtime configuration, validated with pydantic and read from the environment.

Recognised variables::

    PATCHCONV_LOG_LEVEL      DEBUG | INFO | WARNING | ERROR | CRITICAL  (unset: silent)
    PATCHCONV_LOG_FORMAT     plain | json
    PATCHCONV_DEFAULT_DTYPE  float32 | float64
"""
from __future__ import annotations

import os
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError
from .log import configure_logging

ENV_PREFIX = 'PATCHCONV_'


class RuntimeConfig(BaseModel):
    """Process-wide knobs; none of them change numeric results."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    # None leaves the host application's logging setup alone.
    log_level: Optional[Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']] = None
    log_format: Literal['plain', 'json'] = 'plain'
    default_dtype: Literal['float32', 'float64'] = 'float32'

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator('log_format', 'default_dtype', mode='before')
    @classmethod
    def lower_choice(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_runtime_config(environ: Mapping[str, str] | None = None) -> RuntimeConfig:
    """Build a :class:`RuntimeConfig` from ``PATCHCONV_*`` variables."""
    env = os.environ if environ is None else environ
    payload: dict[str, str] = {}
    for field in RuntimeConfig.model_fields:
        key = ENV_PREFIX + field.upper()
        if key in env:
            payload[field] = env[key]
    try:
        return RuntimeConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid PatchConv environment config: {exc}") from exc


_active_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """Return the active config, loading it from the environment on first use."""
    global _active_config
    if _active_config is None:
        set_config(load_runtime_config())
    return _active_config


def set_config(config: RuntimeConfig) -> None:
    """Replace the active config and re-apply its logging settings."""
    global _active_config
    _active_config = config
    configure_logging(config.log_level, config.log_format)
