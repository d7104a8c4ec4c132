"""Environment-driven settings for reckon.

Read once by the CLI; command-line options override what is found here.
Self-contained: no config files, only environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("", "0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    """Display and tokenizing preferences."""

    strict_tokens: bool = False
    digits: Optional[int] = None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {', '.join(_TRUE_VALUES + _FALSE_VALUES[1:])}, got {raw!r}")


def _parse_digits(name: str, raw: str) -> Optional[int]:
    if not raw.strip():
        return None
    try:
        digits = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if digits < 1:
        raise ValueError(f"{name} must be at least 1, got {digits}")
    return digits


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from RECKON_* variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ValueError: A variable is set to something unparseable.
    """
    env = os.environ if env is None else env
    return Settings(
        strict_tokens=_parse_bool("RECKON_STRICT_TOKENS", env.get("RECKON_STRICT_TOKENS", "")),
        digits=_parse_digits("RECKON_DIGITS", env.get("RECKON_DIGITS", "")),
    )
