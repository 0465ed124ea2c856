"""Environment-driven settings for the conversion engine."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class EngineSettings:
    """Behavioural switches for :class:`~omunits.conversion.ConversionEngine`.

    ``cache_inverse``
        Store the inverted transform when a request is answered from the
        reverse-direction cache entry (``OMU_CACHE_INVERSE``).
    ``log_conversions``
        Emit a log event for every newly resolved transform
        (``OMU_LOG_CONVERSIONS``).
    ``scale_require_common_base``
        Refuse scale conversions whose definition chains end at different
        base scales (``OMU_SCALE_REQUIRE_COMMON_BASE``).
    """

    cache_inverse: bool = True
    log_conversions: bool = True
    scale_require_common_base: bool = True

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            cache_inverse=_env_flag("OMU_CACHE_INVERSE", True),
            log_conversions=_env_flag("OMU_LOG_CONVERSIONS", True),
            scale_require_common_base=_env_flag("OMU_SCALE_REQUIRE_COMMON_BASE", True),
        )


__all__ = ["EngineSettings"]
