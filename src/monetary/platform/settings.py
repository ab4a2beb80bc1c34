"""Key-value settings sources consulted when default contexts are initialized."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Protocol

from dotenv import dotenv_values, find_dotenv

logger = logging.getLogger(__name__)


# Known keys
MONEY_DEFAULT_PRECISION_KEY = "monetary.money.defaults.precision"
MONEY_DEFAULT_ROUNDING_MODE_KEY = "monetary.money.defaults.rounding_mode"
MONEY_DEFAULT_MATH_CONTEXT_KEY = "monetary.money.defaults.math_context"
FAST_MONEY_ENFORCE_SCALE_KEY = "monetary.fast_money.enforce_scale_compatibility"


# region Interface


class SettingsSource(Protocol):
    """Read-only source of string settings."""

    def get(self, key: str) -> str | None:
        """Returns the value stored under $key, or None if absent."""
        ...


# endregion

# region Implementations


class EnvironmentSettings:
    """Reads settings from environment variables.

    The key "monetary.money.defaults.precision" is looked up as the variable
    "MONETARY_MONEY_DEFAULTS_PRECISION" (dots become underscores, upper-cased).
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ

    @staticmethod
    def to_variable_name(key: str) -> str:
        return key.replace(".", "_").replace("-", "_").upper()

    def get(self, key: str) -> str | None:
        value = self._environ.get(self.to_variable_name(key))
        if value is None or not value.strip():
            return None
        return value.strip()


class DotEnvSettings:
    """Reads settings from a `.env` file, with the same variable names as `EnvironmentSettings`.

    Variables of the process environment take precedence over the file, like `load_dotenv()`
    without override. Both are captured once, when the source is created.
    """

    def __init__(self, dotenv_path: str | Path | None = None):
        path = dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True)
        file_values = {key: value for key, value in dotenv_values(path).items() if value is not None} if path else {}
        logger.debug(f"Loaded {len(file_values)} variable(s) from dotenv file '{path}'")
        self._environment = EnvironmentSettings({**file_values, **os.environ})

    def get(self, key: str) -> str | None:
        return self._environment.get(key)


class MappingSettings:
    """Settings backed by a plain mapping; handy for tests and embedding applications."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)


# endregion


def get_bool(source: SettingsSource, key: str, default: bool = False) -> bool:
    """Reads $key as boolean ("true"/"false", case-insensitive)."""
    value = source.get(key)
    if value is None:
        return default
    return value.strip().lower() == "true"
