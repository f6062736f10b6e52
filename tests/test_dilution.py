"""Tests for dilution, CFU distribution and multi-strain calculators."""

import pytest

from plate_planner.calculators.dilution import (
    StrainSpec,
    cfu_distribution,
    dilution,
    multi_strain_mix,
)
from plate_planner.errors import (
    ConcentrationOrderingError,
    IncompatibleUnitsError,
    InvalidInputError,
    UnknownUnitError,
    VolumeExceededError,
)


class TestDilution:
    """C1V1 = C2V2 with unit normalization."""

    def test_basic(self):
        result = dilution(100, "µM", 10, "µM", 1000, "µL")
        assert result.stock_volume_ul == pytest.approx(100.0)
        assert result.diluent_volume_ul == pytest.approx(900.0)
        assert result.dilution_factor == pytest.approx(10.0)

    def test_mixed_units(self):
        result = dilution(10, "mM", 50, "µM", 1, "mL")
        assert result.dilution_factor == pytest.approx(200.0)
        assert result.stock_volume_ul == pytest.approx(5.0)
        assert result.diluent_volume_ul == pytest.approx(995.0)
        assert result.final_volume_ul == pytest.approx(1000.0)

    def test_string_inputs(self):
        result = dilution("1×10^3", "µM", "1e2", "uM", "1", "mL")
        assert result.stock_volume_ul == pytest.approx(100.0)

    def test_mass_family(self):
        result = dilution(1, "mg/mL", 10, "µg/mL", 500, "µL")
        assert result.dilution_factor == pytest.approx(100.0)
        assert result.stock_volume_ul == pytest.approx(5.0)

    @pytest.mark.parametrize("stock,stock_unit,target,target_unit", [
        (10, "µM", 10, "µM"),
        (5, "µM", 10, "µM"),
        (1, "nM", 1, "µM"),
    ])
    def test_ordering(self, stock, stock_unit, target, target_unit):
        with pytest.raises(ConcentrationOrderingError):
            dilution(stock, stock_unit, target, target_unit, 1000, "µL")

    def test_cross_family_concentrations(self):
        with pytest.raises(IncompatibleUnitsError):
            dilution(10, "µM", 1, "mg/mL", 1000, "µL")

    def test_volume_must_be_volume(self):
        with pytest.raises(IncompatibleUnitsError):
            dilution(10, "µM", 1, "µM", 1000, "mM")

    @pytest.mark.parametrize("stock,target,volume", [
        ("0", "1", "100"),
        ("10", "-1", "100"),
        ("10", "1", "0"),
        ("ten", "1", "100"),
        ("", "1", "100"),
    ])
    def test_invalid_input(self, stock, target, volume):
        with pytest.raises(InvalidInputError):
            dilution(stock, "µM", target, "µM", volume, "µL")

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            dilution(10, "µM", 1, "microbes", 100, "µL")


class TestCFUDistribution:
    """Inoculum preparation for a set of wells."""

    def test_per_ml_target(self):
        result = cfu_distribution(1e9, "CFU/mL", 1e6, "CFU/mL", 200, 10, 0.32)
        assert result.total_volume_ul == pytest.approx(2000.0)
        assert result.stock_volume_ul == pytest.approx(2.0)
        assert result.diluent_volume_ul == pytest.approx(1998.0)
        assert result.dilution_factor == pytest.approx(1000.0)
        assert result.cfu_per_cm2 == pytest.approx(625000.0)
        assert result.total_surface_area_cm2 == pytest.approx(3.2)

    def test_per_ul_stock(self):
        a = cfu_distribution(1e6, "CFU/µL", 1e6, "CFU/mL", 200, 10, 0.32)
        b = cfu_distribution(1e9, "CFU/mL", 1e6, "CFU/mL", 200, 10, 0.32)
        assert a.stock_volume_ul == pytest.approx(b.stock_volume_ul)

    def test_per_ul_target(self):
        result = cfu_distribution(1e9, "CFU/mL", 1e3, "CFU/µL", 200, 1, 0.32)
        assert result.target_cfu_per_ml == pytest.approx(1e6)

    def test_per_well_target(self):
        result = cfu_distribution("1e9", "CFU/mL", "1e5", "CFU/well", 200, 1, 0.32)
        assert result.target_cfu_per_ml == pytest.approx(5e5)
        assert result.dilution_factor == pytest.approx(2000.0)

    @pytest.mark.parametrize("unit", ["CFU/cm²", "CFU/cm2"])
    def test_per_cm2_target(self, unit):
        result = cfu_distribution(1e9, "CFU/mL", 1e4, unit, 200, 1, 0.32)
        assert result.target_cfu_per_ml == pytest.approx(640.0)

    def test_surface_area_from_plate_format(self):
        result = cfu_distribution(1e9, "CFU/mL", 1e6, "CFU/mL", 500, 4, plate_format=24)
        assert result.total_surface_area_cm2 == pytest.approx(7.6)

    def test_default_well_volume_from_settings(self, monkeypatch):
        from plate_planner.config.settings import settings
        monkeypatch.setattr(settings, "default_well_volume_ul", 100.0)
        result = cfu_distribution(1e9, "CFU/mL", 1e6, "CFU/mL", well_count=3, surface_area_cm2=0.32)
        assert result.total_volume_ul == pytest.approx(300.0)

    @pytest.mark.parametrize("stock,stock_unit,target,target_unit", [
        (1e6, "CFU/mL", 1e6, "CFU/mL"),
        (1, "CFU/µL", 5000, "CFU/mL"),
        (1e3, "CFU/mL", 1000, "CFU/well"),
        (1e3, "CFU/mL", 1e5, "CFU/cm²"),
    ])
    def test_ordering_after_conversion(self, stock, stock_unit, target, target_unit):
        with pytest.raises(ConcentrationOrderingError):
            cfu_distribution(stock, stock_unit, target, target_unit, 200, 1, 0.32)

    def test_non_biological_units(self):
        with pytest.raises(IncompatibleUnitsError):
            cfu_distribution(1e9, "µM", 1e6, "CFU/mL", 200, 1, 0.32)
        with pytest.raises(IncompatibleUnitsError):
            cfu_distribution(1e9, "CFU/mL", 1, "µM", 200, 1, 0.32)

    @pytest.mark.parametrize("well_count", [0, -2, 1.5, True])
    def test_bad_well_count(self, well_count):
        with pytest.raises(InvalidInputError):
            cfu_distribution(1e9, "CFU/mL", 1e6, "CFU/mL", 200, well_count, 0.32)

    def test_non_positive_volume(self):
        with pytest.raises(InvalidInputError):
            cfu_distribution(1e9, "CFU/mL", 1e6, "CFU/mL", 0, 1, 0.32)


class TestMultiStrainMix:
    def _strains(self):
        return [
            StrainSpec("E. coli", "1×10^9", "1e6"),
            StrainSpec("S. aureus", 1e8, 1e6, ratio=2),
        ]

    def test_volumes(self):
        result = multi_strain_mix(self._strains(), 10, "mL")
        a, b = result.strains
        assert a.stock_volume_ul == pytest.approx(10.0)
        assert b.adjusted_target_cfu_per_ml == pytest.approx(2e6)
        assert b.stock_volume_ul == pytest.approx(200.0)
        assert result.total_stock_volume_ul == pytest.approx(210.0)
        assert result.diluent_volume_ul == pytest.approx(9790.0)
        assert result.total_volume_ul == pytest.approx(10000.0)

    def test_needs_two_strains(self):
        with pytest.raises(InvalidInputError):
            multi_strain_mix(self._strains()[:1], 10, "mL")

    def test_strain_stock_too_low(self):
        strains = [StrainSpec("A", 1e9, 1e6), StrainSpec("B", 1e6, 1e6, ratio=2)]
        with pytest.raises(ConcentrationOrderingError, match="B"):
            multi_strain_mix(strains, 10, "mL")

    def test_volume_exceeded(self):
        strains = [StrainSpec("A", 2e6, 1e6), StrainSpec("B", 2e6, 1e6)]
        with pytest.raises(VolumeExceededError):
            multi_strain_mix(strains, 10, "mL")

    def test_per_ul_strain_units(self):
        strains = [
            StrainSpec("A", 1e6, 1e3, unit="CFU/µL"),
            StrainSpec("B", 1e9, 1e6),
        ]
        result = multi_strain_mix(strains, 1, "mL")
        assert result.strains[0].stock_volume_ul == pytest.approx(result.strains[1].stock_volume_ul)
