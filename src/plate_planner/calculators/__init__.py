"""Stateless laboratory calculators."""

from plate_planner.calculators.dilution import (
    CFUResult,
    DilutionResult,
    MultiStrainResult,
    StrainSpec,
    StrainVolume,
    cfu_distribution,
    dilution,
    multi_strain_mix,
)
from plate_planner.calculators.serial import (
    SerialDilutionStep,
    colonies_to_concentration,
    iter_serial_dilution,
    serial_dilution_series,
)
from plate_planner.calculators.power import PowerAnalysisResult, statistical_power

__all__ = [
    "CFUResult",
    "DilutionResult",
    "MultiStrainResult",
    "StrainSpec",
    "StrainVolume",
    "cfu_distribution",
    "dilution",
    "multi_strain_mix",
    "SerialDilutionStep",
    "colonies_to_concentration",
    "iter_serial_dilution",
    "serial_dilution_series",
    "PowerAnalysisResult",
    "statistical_power",
]
