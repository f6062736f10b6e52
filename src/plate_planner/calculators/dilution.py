"""
Dilution calculators (C1V1 = C2V2).

All inputs may be raw user strings ("1×10^9", "2.5e6") or numbers; they go
through the scientific parser and the unit converter before any math.
Volumes in results are in µL.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from plate_planner.config.settings import settings
from plate_planner.errors import (
    ConcentrationOrderingError,
    IncompatibleUnitsError,
    InvalidInputError,
    VolumeExceededError,
)
from plate_planner.parsing import Number, parse_positive
from plate_planner.plate_formats import PlateFormat, get_plate_format
from plate_planner.units import (
    CANONICAL_UNITS,
    UnitFamily,
    convert,
    normalize_unit,
    to_canonical,
    unit_family,
)

logger = logging.getLogger(__name__)

VOLUME_UNIT = CANONICAL_UNITS[UnitFamily.VOLUME]

# CFU targets expressed per well or per growth area rather than per volume
CFU_PER_WELL = "CFU/well"
CFU_PER_CM2_ALIASES = ("CFU/cm²", "CFU/cm2", "CFU/cm^2")


@dataclass
class DilutionResult:
    stock_volume_ul: float
    diluent_volume_ul: float
    dilution_factor: float
    final_volume_ul: float


@dataclass
class CFUResult:
    """Inoculum recipe for seeding ``well_count`` wells."""
    stock_volume_ul: float
    diluent_volume_ul: float
    total_volume_ul: float
    dilution_factor: float
    cfu_per_cm2: float
    total_surface_area_cm2: float
    stock_cfu_per_ml: float
    target_cfu_per_ml: float


@dataclass
class StrainSpec:
    """One strain in a mixed inoculum. ``ratio`` scales its target."""
    name: str
    stock_conc: Number
    target_conc: Number
    ratio: float = 1.0
    unit: str = "CFU/mL"


@dataclass
class StrainVolume:
    name: str
    stock_cfu_per_ml: float
    adjusted_target_cfu_per_ml: float
    stock_volume_ul: float
    dilution_factor: float


@dataclass
class MultiStrainResult:
    strains: List[StrainVolume]
    total_volume_ul: float
    total_stock_volume_ul: float
    diluent_volume_ul: float


def _volume_ul(value: Number, unit: str, field: str) -> float:
    volume = parse_positive(value, field)
    return convert(volume, unit, VOLUME_UNIT)


def _c1v1(stock: float, target: float, final_volume_ul: float, label: str = "Stock"):
    if stock <= target:
        raise ConcentrationOrderingError(stock, target, label)
    stock_volume = target * final_volume_ul / stock
    return stock_volume, final_volume_ul - stock_volume, stock / target


def dilution(
    stock_conc: Number,
    stock_unit: str,
    target_conc: Number,
    target_unit: str,
    final_volume: Number,
    volume_unit: str = VOLUME_UNIT,
) -> DilutionResult:
    """
    Stock and diluent volumes for a single dilution.

    Concentrations may use different units of the same family
    (e.g. mM stock, nM target).

    Raises:
        InvalidInputError: Unparseable or non-positive input, unknown unit
        IncompatibleUnitsError: Stock/target or volume unit family mismatch
        ConcentrationOrderingError: Stock not above target after conversion
    """
    stock = parse_positive(stock_conc, "stock concentration")
    target = parse_positive(target_conc, "target concentration")
    final_volume_ul = _volume_ul(final_volume, volume_unit, "final volume")

    if unit_family(stock_unit) is not unit_family(target_unit):
        raise IncompatibleUnitsError(stock_unit, target_unit)
    stock_c = to_canonical(stock, stock_unit)
    target_c = to_canonical(target, target_unit)

    stock_volume, diluent_volume, factor = _c1v1(stock_c, target_c, final_volume_ul)
    logger.debug(f"Dilution {factor:g}x: {stock_volume:g} µL stock + {diluent_volume:g} µL diluent")
    return DilutionResult(
        stock_volume_ul=stock_volume,
        diluent_volume_ul=diluent_volume,
        dilution_factor=factor,
        final_volume_ul=final_volume_ul,
    )


def _target_cfu_per_ml(target: float, unit: str, well_volume_ul: float, surface_area_cm2: float) -> float:
    normalized = normalize_unit(unit)
    well_volume_ml = well_volume_ul / 1000
    if normalized == CFU_PER_WELL:
        return target / well_volume_ml
    if normalized in CFU_PER_CM2_ALIASES:
        return target * surface_area_cm2 * well_volume_ml
    if unit_family(unit) is not UnitFamily.BIOLOGICAL:
        raise IncompatibleUnitsError(unit, CANONICAL_UNITS[UnitFamily.BIOLOGICAL])
    return to_canonical(target, unit)


def cfu_distribution(
    stock_cfu: Number,
    stock_unit: str,
    target_cfu: Number,
    target_unit: str,
    well_volume_ul: Optional[Number] = None,
    well_count: int = 1,
    surface_area_cm2: Optional[Number] = None,
    plate_format: Union[int, str, PlateFormat, None] = None,
) -> CFUResult:
    """
    Prepare enough inoculum at the target density for ``well_count`` wells.

    Args:
        stock_cfu: Stock density
        stock_unit: CFU/mL or CFU/µL
        target_cfu: Target density
        target_unit: CFU/mL, CFU/µL, CFU/well or CFU/cm²
        well_volume_ul: Volume dispensed per well (default from settings)
        well_count: Number of wells to seed
        surface_area_cm2: Growth area per well (default: plate format's)
        plate_format: Plate used for the surface area default

    Returns:
        CFUResult; volumes in µL
    """
    stock = parse_positive(stock_cfu, "stock CFU")
    target = parse_positive(target_cfu, "target CFU")
    if well_volume_ul is None:
        well_volume_ul = settings.default_well_volume_ul
    well_volume = parse_positive(well_volume_ul, "well volume")
    if isinstance(well_count, bool) or not isinstance(well_count, numbers.Integral) or well_count < 1:
        raise InvalidInputError(f"well_count must be an integer >= 1, got {well_count!r}")
    well_count = int(well_count)
    if surface_area_cm2 is None:
        fmt = get_plate_format(plate_format if plate_format is not None else settings.default_plate_format)
        area = fmt.surface_area_cm2
    else:
        area = parse_positive(surface_area_cm2, "surface area")

    if unit_family(stock_unit) is not UnitFamily.BIOLOGICAL:
        raise IncompatibleUnitsError(stock_unit, CANONICAL_UNITS[UnitFamily.BIOLOGICAL])
    stock_per_ml = to_canonical(stock, stock_unit)
    target_per_ml = _target_cfu_per_ml(target, target_unit, well_volume, area)

    total_volume = well_volume * well_count
    stock_volume, diluent_volume, factor = _c1v1(stock_per_ml, target_per_ml, total_volume)

    logger.debug(
        f"CFU distribution: {well_count} wells x {well_volume:g} µL at {target_per_ml:g} CFU/mL"
    )
    return CFUResult(
        stock_volume_ul=stock_volume,
        diluent_volume_ul=diluent_volume,
        total_volume_ul=total_volume,
        dilution_factor=factor,
        cfu_per_cm2=target_per_ml * (well_volume / 1000) / area,
        total_surface_area_cm2=area * well_count,
        stock_cfu_per_ml=stock_per_ml,
        target_cfu_per_ml=target_per_ml,
    )


def multi_strain_mix(
    strains: Sequence[StrainSpec],
    total_volume: Number,
    volume_unit: str = "mL",
) -> MultiStrainResult:
    """
    Volumes of each strain stock for a mixed inoculum.

    Each strain contributes ``target * ratio`` CFU/mL to the final mix; the
    remainder of the total volume is diluent.

    Raises:
        InvalidInputError: Fewer than two strains, or bad numeric input
        ConcentrationOrderingError: A stock is not above its adjusted target
        VolumeExceededError: Stocks alone fill the total volume
    """
    if len(strains) < 2:
        raise InvalidInputError("At least 2 strains are required for a mixed inoculum")
    total_ul = _volume_ul(total_volume, volume_unit, "total volume")

    volumes = []
    for strain in strains:
        if unit_family(strain.unit) is not UnitFamily.BIOLOGICAL:
            raise IncompatibleUnitsError(strain.unit, CANONICAL_UNITS[UnitFamily.BIOLOGICAL])
        stock = to_canonical(parse_positive(strain.stock_conc, f"{strain.name} stock"), strain.unit)
        target = to_canonical(parse_positive(strain.target_conc, f"{strain.name} target"), strain.unit)
        ratio = parse_positive(strain.ratio, f"{strain.name} ratio")
        adjusted = target * ratio

        stock_volume, _, factor = _c1v1(stock, adjusted, total_ul, label=f"{strain.name} stock")
        volumes.append(StrainVolume(
            name=strain.name,
            stock_cfu_per_ml=stock,
            adjusted_target_cfu_per_ml=adjusted,
            stock_volume_ul=stock_volume,
            dilution_factor=factor,
        ))

    total_stock = sum(v.stock_volume_ul for v in volumes)
    if total_stock >= total_ul:
        raise VolumeExceededError(
            f"Total stock volume ({total_stock:g} µL) exceeds target volume ({total_ul:g} µL)"
        )

    return MultiStrainResult(
        strains=volumes,
        total_volume_ul=total_ul,
        total_stock_volume_ul=total_stock,
        diluent_volume_ul=total_ul - total_stock,
    )
