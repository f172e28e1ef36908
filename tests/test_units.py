import pytest

from pdfcompose.units import Box, Unit, UnitConfig, points_to_units, units_to_points


def test_inches_to_points():
    assert units_to_points(Unit.IN, 1.0) == pytest.approx(72.0)


def test_mm_to_points_matches_inch():
    assert units_to_points(Unit.MM, 25.4) == pytest.approx(units_to_points(Unit.IN, 1.0))


def test_cm_equals_ten_mm():
    assert units_to_points(Unit.CM, 1.0) == pytest.approx(units_to_points(Unit.MM, 10.0))


def test_points_are_identity():
    assert units_to_points(Unit.PT, 12.5) == 12.5


def test_unset_and_unknown_units_leave_value():
    assert units_to_points(Unit.UNSET, 7.0) == 7.0
    assert units_to_points(99, 7.0) == 7.0
    assert points_to_units(99, 7.0) == 7.0


@pytest.mark.parametrize("unit", list(Unit))
def test_round_trip(unit):
    assert points_to_units(unit, units_to_points(unit, 3.3)) == pytest.approx(3.3)


def test_conversion_factor_overrides_unit():
    config = UnitConfig(unit=Unit.IN, conversion_for_unit=2.0)
    assert config.to_points(5.0) == 10.0
    assert config.to_units(10.0) == 5.0


def test_box_units_to_points_uses_given_unit():
    box = Box(left=1, top=2, right=3, bottom=4)
    converted = box.units_to_points(Unit.IN)
    assert converted.left == pytest.approx(units_to_points(Unit.IN, 1))
    assert converted.bottom == pytest.approx(units_to_points(Unit.IN, 4))
    assert box.left == 1


def test_box_override_wins():
    box = Box(left=1, top=1, right=1, bottom=1, unit_override=UnitConfig(unit=Unit.PT))
    converted = box.units_to_points(Unit.IN)
    assert (converted.left, converted.top, converted.right, converted.bottom) == (1, 1, 1, 1)


def test_box_unset_override_is_ignored():
    box = Box(left=2, unit_override=UnitConfig(unit=Unit.UNSET, conversion_for_unit=5.0))
    assert box.units_to_points(Unit.PX).left == pytest.approx(units_to_points(Unit.PX, 2))