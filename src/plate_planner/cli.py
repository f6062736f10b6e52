#!/usr/bin/env python3
"""
Command-line interface for plate layouts and lab calculators.

Usage:
    plate-planner layout design.yaml --edge-correction --randomize --seed 7
    plate-planner power --effect-size 0.5 --alpha 0.05 --power 0.8 --groups 3
    plate-planner dilution 10 mM 50 uM 1 mL
"""
import argparse
import logging
import sys

from plate_planner.calculators import dilution, statistical_power
from plate_planner.config import load_design, load_settings_from_yaml
from plate_planner.config.settings import settings
from plate_planner.errors import PlatePlannerError
from plate_planner.experimental_design import (
    allocate,
    correct_edge_effects,
    layout_to_frame,
    plate_usage,
    shuffle_layout,
)
from plate_planner.parsing import format_scientific

logger = logging.getLogger(__name__)


def run_layout(args, active_settings) -> int:
    design = load_design(args.design, defaults=active_settings)
    usage = plate_usage(**design)
    logger.info(
        f"{usage.wells_needed}/{usage.wells_available} wells "
        f"({usage.utilization_pct}%), {usage.total_surface_area_cm2} cm² growth area"
    )

    layout = allocate(**design)
    if args.edge_correction:
        correct_edge_effects(layout)
    if args.randomize:
        seed = args.seed if args.seed is not None else active_settings.random_seed
        shuffle_layout(layout, seed)

    layout_to_frame(layout).to_csv(sys.stdout, index=False)
    return 0


def run_power(args, active_settings) -> int:
    result = statistical_power(args.effect_size, args.alpha, args.power, args.groups)
    print(f"z_alpha: {result.z_alpha:.4f}")
    print(f"z_beta: {result.z_beta:.4f}")
    print(f"Samples per group: {result.per_group_sample_size}")
    print(f"Total samples: {result.total_sample_size}")
    return 0


def run_dilution(args, active_settings) -> int:
    result = dilution(
        args.stock, args.stock_unit, args.target, args.target_unit,
        args.volume, args.volume_unit,
    )
    print(f"Stock volume: {format_scientific(result.stock_volume_ul)} µL")
    print(f"Diluent volume: {format_scientific(result.diluent_volume_ul)} µL")
    print(f"Dilution factor: {format_scientific(result.dilution_factor)}x")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plate-planner",
        description="Plate layout design and laboratory calculators",
    )
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--log-level", help="Logging level (default from settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    layout = sub.add_parser("layout", help="Allocate a plate layout and print it as CSV")
    layout.add_argument("design", help="YAML design file")
    layout.add_argument("--edge-correction", action="store_true", help="Move samples off edge wells")
    layout.add_argument("--randomize", action="store_true", help="Shuffle well assignment")
    layout.add_argument("--seed", type=int, default=None, help="Random seed for --randomize")
    layout.set_defaults(handler=run_layout)

    power = sub.add_parser("power", help="Sample size for a two-group comparison")
    power.add_argument("--effect-size", required=True)
    power.add_argument("--alpha", default="0.05")
    power.add_argument("--power", default="0.8")
    power.add_argument("--groups", type=int, default=2)
    power.set_defaults(handler=run_power)

    dil = sub.add_parser("dilution", help="C1V1 = C2V2 dilution")
    dil.add_argument("stock", help="Stock concentration, e.g. 1e3 or 1x10^3")
    dil.add_argument("stock_unit")
    dil.add_argument("target", help="Target concentration")
    dil.add_argument("target_unit")
    dil.add_argument("volume", help="Final volume")
    dil.add_argument("volume_unit")
    dil.set_defaults(handler=run_dilution)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    active_settings = load_settings_from_yaml(args.config) if args.config else settings

    logging.basicConfig(
        level=(args.log_level or active_settings.log_level).upper(),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        return args.handler(args, active_settings)
    except (PlatePlannerError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
