#!/usr/bin/env python3
"""
Command-line closed-region report for annotated floor-plan areas.

Usage:
    python regions_cli.py <area.json> [options]

Options:
    --config        Region config JSON (default: <area>.regions_config.json)
    --tolerance     Edge tolerance in pixels (overrides config)
    --min-area      Minimum region area in pixels^2 (overrides config)
    --render        Save a PNG preview of the regions
    --json          Print regions as JSON instead of a table

Example:
    python regions_cli.py area-2024-05-01.json --render regions.png
"""

import sys
import os
import argparse
import json

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from area_io import load_area
from closed_regions import find_closed_regions
from config import RegionConfig


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Report the closed regions of an annotated area',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s area.json
  %(prog)s area.json --json
  %(prog)s area.json --tolerance 4 --min-area 20 --render regions.png
        """
    )
    parser.add_argument('input', help='Input area file (.json)')
    parser.add_argument('--config', default=None,
                        help='Region config JSON (default: <area>.regions_config.json)')
    parser.add_argument('--tolerance', type=float, default=None,
                        help='Edge tolerance in pixels')
    parser.add_argument('--min-area', type=float, default=None,
                        help='Minimum region area in pixels^2')
    parser.add_argument('--render', default=None,
                        help='Save a PNG preview to this path')
    parser.add_argument('--json', action='store_true',
                        help='Print regions as JSON')
    parser.add_argument('--debug', action='store_true',
                        help='Print extraction stage counts (ignored with --json)')

    args = parser.parse_args(argv)

    if not os.path.exists(args.input):
        print(f"ERROR: Input file not found: {args.input}")
        sys.exit(1)

    try:
        if args.config:
            config = RegionConfig.load(args.config)
        else:
            config = RegionConfig.load_for_area(args.input)
        if args.tolerance is not None:
            config.edge_tolerance = args.tolerance
        if args.min_area is not None:
            config.min_region_area = args.min_area

        errors = config.validate()
        if errors:
            for error in errors:
                print(f"ERROR: {error}")
            sys.exit(1)

        area = load_area(args.input)
        vertices, edges = area.vertices, area.edges

        if not args.json:
            print(f"Loaded area: {args.input}")
            print(f"Topology: {len(vertices)} vertices, {len(edges)} edges, {len(area.features)} features")

        regions = find_closed_regions(vertices, edges, config=config, debug=args.debug and not args.json)

        if args.json:
            print(json.dumps([r.to_dict() for r in regions], indent=2))
        else:
            print(f"Found {len(regions)} region(s)")
            for i, region in enumerate(regions):
                ids = ", ".join(region.boundary.vertex_ids)
                print(f"  [{i}] {ids} | holes: {len(region.holes)} | net area: {region.net_area:.1f}")

        if args.render:
            from region_render import render_regions
            render_regions(regions, vertices, edges, image_size=area.size,
                           output=args.render, title=area.name or None)
            if not args.json:
                print(f"Rendered: {args.render}")

    except Exception as e:
        print(f"ERROR: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
