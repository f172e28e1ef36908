"""Measurement units and their conversion to PDF points."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum

CONVERSION_PT = 1.0
CONVERSION_MM = 72.0 / 25.4
CONVERSION_CM = 72.0 / 2.54
CONVERSION_IN = 72.0
# A resolution of 96 dpi is assumed for pixels (72 / 96).
CONVERSION_PX = 3.0 / 4.0


class Unit(IntEnum):
    """Units a document can be composed in."""

    UNSET = 0
    PT = 1
    MM = 2
    CM = 3
    IN = 4
    PX = 5


_FACTORS = {
    Unit.PT: CONVERSION_PT,
    Unit.MM: CONVERSION_MM,
    Unit.CM: CONVERSION_CM,
    Unit.IN: CONVERSION_IN,
    Unit.PX: CONVERSION_PX,
}


def _factor(unit: int) -> float | None:
    try:
        return _FACTORS.get(Unit(unit))
    except ValueError:
        return None


@dataclass(frozen=True)
class UnitConfig:
    """A unit, optionally overridden by an explicit points-per-unit factor.

    When ``conversion_for_unit`` is non-zero it is used instead of ``unit``.
    """

    unit: int = Unit.UNSET
    conversion_for_unit: float = 0.0

    def to_points(self, value: float) -> float:
        """Convert ``value`` from this unit to points."""
        if self.conversion_for_unit != 0:
            return value * self.conversion_for_unit
        factor = _factor(self.unit)
        return value if factor is None else value * factor

    def to_units(self, value: float) -> float:
        """Convert ``value`` from points to this unit."""
        if self.conversion_for_unit != 0:
            return value / self.conversion_for_unit
        factor = _factor(self.unit)
        return value if factor is None else value / factor


def _as_config(unit: int | UnitConfig) -> UnitConfig:
    return unit if isinstance(unit, UnitConfig) else UnitConfig(unit=unit)


def units_to_points(unit: int | UnitConfig, value: float) -> float:
    """Convert ``value`` in ``unit`` to points."""
    return _as_config(unit).to_points(value)


def points_to_units(unit: int | UnitConfig, value: float) -> float:
    """Convert ``value`` in points to ``unit``."""
    return _as_config(unit).to_units(value)


@dataclass
class Box:
    """A box given by its four edges, optionally in its own unit."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    unit_override: UnitConfig | None = None

    def units_to_points(self, unit: int | UnitConfig) -> Box:
        """Return a copy with all edges converted to points.

        The box's own ``unit_override`` wins over ``unit`` when it names a unit.
        """
        config = _as_config(unit)
        if self.unit_override is not None and self.unit_override.unit != Unit.UNSET:
            config = self.unit_override
        return replace(
            self,
            left=config.to_points(self.left),
            top=config.to_points(self.top),
            right=config.to_points(self.right),
            bottom=config.to_points(self.bottom),
            unit_override=None,
        )