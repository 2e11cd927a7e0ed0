"""
Configuration
=============

Settings are read from environment variables prefixed with ``MULTICURVE_``.
Every setting has a default suitable for interactive use.

Environment Variables
---------------------
MULTICURVE_LOG_LEVEL : str
    Logging level (DEBUG, INFO, WARNING, ERROR). Default "INFO".
MULTICURVE_MAX_CONDITION_NUMBER : float
    Largest condition number accepted when inverting the sensitivity
    matrix. Default 1e12.
MULTICURVE_BOOTSTRAP_ACCURACY : float
    Absolute tolerance of the per-pillar root solve. Default 1e-12.
MULTICURVE_BOOTSTRAP_MAX_ITER : int
    Iteration cap of the per-pillar root solve. Default 300.

Example
-------
>>> from multicurve_sensitivities.config import get_settings
>>> settings = get_settings()
>>> settings.configure_logging()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_env(key: str, default: Any, value_type: type = str) -> Any:
    """
    Read ``MULTICURVE_<KEY>`` and convert it to ``value_type``.

    Falls back to ``default`` when the variable is unset. A value that cannot
    be converted raises ValueError naming the variable.
    """
    env_name = f"MULTICURVE_{key.upper()}"
    env_value = os.environ.get(env_name)

    if env_value is None:
        return default

    try:
        if value_type == bool:
            return env_value.lower() in ("true", "1", "yes", "on")
        return value_type(env_value)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {env_name}: {env_value!r}") from exc


class Settings:
    """
    Package settings.

    >>> from multicurve_sensitivities.config import get_settings
    >>> get_settings().max_condition_number
    1000000000000.0
    """

    def __init__(self) -> None:
        self.log_level: str = _get_env("log_level", "INFO")
        self.max_condition_number: float = _get_env("max_condition_number", 1e12, float)
        self.bootstrap_accuracy: float = _get_env("bootstrap_accuracy", 1e-12, float)
        self.bootstrap_max_iter: int = _get_env("bootstrap_max_iter", 300, int)

        if self.max_condition_number <= 0:
            raise ValueError("max_condition_number must be positive")
        if self.bootstrap_accuracy <= 0:
            raise ValueError("bootstrap_accuracy must be positive")
        if self.bootstrap_max_iter <= 0:
            raise ValueError("bootstrap_max_iter must be positive")

    @property
    def log_level_int(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    def configure_logging(self) -> None:
        """Configure root logging from these settings."""
        logging.basicConfig(level=self.log_level_int, format=LOG_FORMAT)
        logging.getLogger("MultiCurve").setLevel(self.log_level_int)

    def __repr__(self) -> str:
        return (
            f"Settings(log_level={self.log_level!r}, "
            f"max_condition_number={self.max_condition_number!r}, "
            f"bootstrap_accuracy={self.bootstrap_accuracy!r}, "
            f"bootstrap_max_iter={self.bootstrap_max_iter!r})"
        )


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance (environment is read once)."""
    return Settings()
