"""Tests for serial dilutions and colony counts."""

import pytest

from plate_planner.calculators.serial import (
    colonies_to_concentration,
    iter_serial_dilution,
    serial_dilution_series,
)
from plate_planner.errors import InvalidInputError


class TestSerialDilution:
    def test_tenfold_series(self):
        assert serial_dilution_series(1e9, 10, 3) == [
            (0, "Stock", 1e9),
            (1, "1:10", 1e8),
            (2, "1:100", 1e7),
            (3, "1:1000", 1e6),
        ]

    def test_length(self):
        assert len(serial_dilution_series(1e6, 2, 8)) == 9
        assert serial_dilution_series(1e6, 2, 0) == [(0, "Stock", 1e6)]

    def test_fields(self):
        last = serial_dilution_series("1×10^9", "10", 2)[-1]
        assert last.step == 2
        assert last.dilution_label == "1:100"
        assert last.concentration == pytest.approx(1e7)

    def test_fractional_factor(self):
        series = serial_dilution_series(100, 2.5, 2)
        assert [s.dilution_label for s in series] == ["Stock", "1:2.5", "1:6.25"]
        assert series[2].concentration == pytest.approx(16.0)

    def test_fresh_each_call(self):
        assert serial_dilution_series(1e9, 10, 3) == serial_dilution_series(1e9, 10, 3)

    def test_iterator_is_single_use(self):
        steps = iter_serial_dilution(1e9, 10, 2)
        assert len(list(steps)) == 3
        assert list(steps) == []

    @pytest.mark.parametrize("initial,factor,steps", [
        (0, 10, 3),
        (1e9, 1, 3),
        (1e9, 0.5, 3),
        (1e9, 10, -1),
        (1e9, 10, 2.5),
        ("many", 10, 3),
    ])
    def test_invalid(self, initial, factor, steps):
        with pytest.raises(InvalidInputError):
            serial_dilution_series(initial, factor, steps)

    def test_invalid_raises_before_iteration(self):
        with pytest.raises(InvalidInputError):
            iter_serial_dilution(1e9, 10, -1)

    @pytest.mark.parametrize("initial,factor,steps", [
        (1e9, 10, 400),
        (1e9, 2.5, 1000),
        (1e9, 1e300, 2),
    ])
    def test_cumulative_factor_out_of_range(self, initial, factor, steps):
        with pytest.raises(InvalidInputError):
            serial_dilution_series(initial, factor, steps)

    def test_underflow_to_zero_rejected(self):
        with pytest.raises(InvalidInputError, match="underflow"):
            serial_dilution_series(1e-300, 10, 300)

    def test_long_series_within_range(self):
        series = serial_dilution_series(1e9, 10, 300)
        assert len(series) == 301
        assert series[-1].dilution_label == "1:1" + "0" * 300
        assert series[-1].concentration == pytest.approx(1e-291)


class TestColonies:
    def test_back_calculation(self):
        assert colonies_to_concentration(150, 0.1, 1e6) == pytest.approx(1.5e9)

    def test_string_dilution_factor(self):
        assert colonies_to_concentration(42, "0.1", "1×10^4") == pytest.approx(4.2e6)

    def test_zero_colonies(self):
        assert colonies_to_concentration(0, 0.1, 1e6) == 0.0

    @pytest.mark.parametrize("colonies,volume,factor", [
        (-1, 0.1, 10),
        (2.5, 0.1, 10),
        (10, 0, 10),
        (10, 0.1, 0),
    ])
    def test_invalid(self, colonies, volume, factor):
        with pytest.raises(InvalidInputError):
            colonies_to_concentration(colonies, volume, factor)
