"""Command line entry point for growing and rendering river networks."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

import structlog

from ..api.visualizer import render_network
from ..config.river_presets import get_preset, list_presets
from ..config.settings import settings
from ..core.alea_prng import AleaPRNG
from ..core.river_gen import RiverGen
from .logging import configure_logging

logger = structlog.get_logger()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grow a river network inside a contour preset")
    parser.add_argument("--preset", default=settings.default_preset, choices=list_presets(),
                        help="Contour preset")
    parser.add_argument("--seed", default=settings.default_seed, help="Random seed")
    parser.add_argument("--output", type=Path, default=None,
                        help="Output image (format from extension, default <output_dir>/<preset>_<seed>.svg)")
    parser.add_argument("--prob-growth", type=float, default=None)
    parser.add_argument("--prob-symmetric", type=float, default=None)
    parser.add_argument("--prob-asymetric", type=float, default=None)
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="Logging level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    preset = get_preset(args.preset)
    overrides = {
        name: value
        for name, value in (
            ("prob_growth", args.prob_growth),
            ("prob_symmetric", args.prob_symmetric),
            ("prob_asymetric", args.prob_asymetric),
        )
        if value is not None
    }
    river_settings = replace(preset.settings, **overrides)

    gen = RiverGen(
        AleaPRNG(args.seed),
        preset.build_slope_map(),
        preset.contour,
        preset.build_graph(),
        river_settings,
    )
    gen.grow_network()
    stats = gen.stats
    graph = gen.into_graph()

    output = args.output or Path(settings.output_dir) / f"{preset.name}_{args.seed}.svg"
    render_network(graph, preset.contour, output)

    print(f"Grew {graph.edge_count} edges ({len(graph)} nodes) in {stats.steps} steps")
    print(f"Branches: {stats.branches}")
    print(f"Saved: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
