from __future__ import annotations

"""Environment-driven settings for the qparas client."""

import os
from dataclasses import dataclass
from typing import Any, Mapping

from qparas import __version__

DEFAULT_BASE_URL = "https://api-v2-mainnet.paras.id"


@dataclass(slots=True)
class ParasConfig:
    """Runtime settings; every field has a usable default."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = f"qparas/{__version__}"
    timeout: float | None = None
    log_level: str = "WARNING"


def _coerce_timeout(value: Any) -> float | None:
    if value in (None, ""):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


def load_config(env: Mapping[str, str] | None = None) -> ParasConfig:
    """Build a :class:`ParasConfig` from ``env`` (defaults to ``os.environ``)."""

    env = os.environ if env is None else env
    defaults = ParasConfig()
    return ParasConfig(
        base_url=env.get("PARAS_URL") or defaults.base_url,
        user_agent=env.get("QPARAS_USER_AGENT") or defaults.user_agent,
        timeout=_coerce_timeout(env.get("QPARAS_TIMEOUT")),
        log_level=(env.get("QPARAS_LOG_LEVEL") or defaults.log_level).upper(),
    )


__all__ = ["ParasConfig", "load_config", "DEFAULT_BASE_URL"]
