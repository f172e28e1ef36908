"""Typed key/value store for font metrics, the encoding map entry and rounding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class NoKeyFoundError(KeyError):
    """The requested key is not present."""


class WrongTypeError(TypeError):
    """The value under a key has a different type than requested."""


class TtfInfo(dict):
    """A dictionary of font information with type-checked getters."""

    def _get(self, key: str) -> Any:
        try:
            return self[key]
        except KeyError:
            raise NoKeyFoundError(key) from None

    def get_bool(self, key: str) -> bool:
        value = self._get(key)
        if not isinstance(value, bool):
            raise WrongTypeError(key)
        return value

    def get_str(self, key: str) -> str:
        value = self._get(key)
        if not isinstance(value, str):
            raise WrongTypeError(key)
        return value

    def get_int(self, key: str) -> int:
        value = self._get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise WrongTypeError(key)
        return value

    def get_ints(self, key: str) -> list[int]:
        value = self._get(key)
        if not isinstance(value, (list, tuple)):
            raise WrongTypeError(key)
        return list(value)

    def get_int_map(self, key: str) -> dict[int, int]:
        value = self._get(key)
        if not isinstance(value, dict):
            raise WrongTypeError(key)
        return value


@dataclass
class FontMap:
    """One entry of an encoding map: a Unicode value and a glyph name."""

    uv: int = -1
    name: str = ".notdef"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value - 0.5) if value < 0.0 else int(value + 0.5)