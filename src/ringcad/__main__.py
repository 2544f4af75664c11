#!/usr/bin/env python3
## command-line front end for ringCAD
## Copyright (c) 2025 ringCAD contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
CLI for inspecting and processing ringCAD point files.

Usage:
    python -m ringcad info FILE
    python -m ringcad lod ZOOM [--config FILE]
    python -m ringcad simplify FILE --zoom Z [--output FILE]
    python -m ringcad export-dxf FILE OUTPUT [--layer NAME]

FILE is a JSON or YAML rings document, a list of point records, or a
list of point-record lists (see ``ringcad.io.points``).

Examples:
    # Area, perimeter and checks for every ring in a file
    python -m ringcad info shapes.json

    # LOD parameters at 0.5x zoom with a custom config
    python -m ringcad lod 0.5 --config lod.yaml

    # Decimate for a zoomed-out view
    python -m ringcad simplify shapes.json --zoom 0.3 --output small.json
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict

from ringcad.config import load_lod_config
from ringcad.geom import area, bounding_box, centroid, is_ccw, perimeter
from ringcad.geometry_checks import check_ring
from ringcad.io.dxf import write_dxf
from ringcad.io.points import load_rings, rings_to_json, save_rings
from ringcad.lod import calculate_lod, rendering_hints, simplify

logger = logging.getLogger(__name__)


def cmd_info(args):
    """Print metrics and check results for each ring in a file."""
    rings = load_rings(args.file)
    print(f"{args.file}: {len(rings)} ring(s)")
    for i, ring in enumerate(rings):
        box = bounding_box(ring)
        c = centroid(ring)
        result = check_ring(ring)
        print(f"ring {i}: {ring.size} vertices")
        print(f"  area:      {area(ring):.6g}")
        print(f"  perimeter: {perimeter(ring):.6g}")
        print(f"  bbox:      ({box.min_x:.6g}, {box.min_y:.6g}) - ({box.max_x:.6g}, {box.max_y:.6g})")
        print(f"  centroid:  ({c.x:.6g}, {c.y:.6g})")
        print(f"  winding:   {'ccw' if is_ccw(ring) else 'cw'}")
        for warning in result.warnings:
            print(f"  warning: {warning}")
    return 0


def cmd_lod(args):
    """Print LOD parameters and rendering hints for a zoom factor."""
    config = load_lod_config(args.config)
    doc = {
        'zoom': args.zoom,
        'lod': asdict(calculate_lod(args.zoom, config)),
        'hints': asdict(rendering_hints(args.zoom, config)),
    }
    print(json.dumps(doc, indent=2))
    return 0


def cmd_simplify(args):
    """Simplify every ring in a file for the given zoom."""
    config = load_lod_config(args.config)
    rings = [simplify(r, args.zoom, config) for r in load_rings(args.file)]
    if args.output:
        save_rings(rings, args.output)
        logger.info("wrote %d ring(s) to %s", len(rings), args.output)
    else:
        print(json.dumps(rings_to_json(rings), indent=2))
    return 0


def cmd_export_dxf(args):
    """Write every ring in a file to DXF."""
    rings = load_rings(args.file)
    if not write_dxf(rings, args.output, layer=args.layer):
        print(f"Error: could not write {args.output}", file=sys.stderr)
        return 1
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='python -m ringcad',
        description='ringCAD polygon ring tools',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    info_parser = subparsers.add_parser('info', help='Print ring metrics')
    info_parser.add_argument('file', help='Point file (JSON or YAML)')

    lod_parser = subparsers.add_parser('lod', help='Print LOD parameters for a zoom')
    lod_parser.add_argument('zoom', type=float, help='Zoom factor')
    lod_parser.add_argument('-c', '--config', metavar='FILE',
                            help='LOD config YAML (default: $RINGCAD_LOD_CONFIG)')

    simplify_parser = subparsers.add_parser('simplify', help='Simplify rings for a zoom')
    simplify_parser.add_argument('file', help='Point file (JSON or YAML)')
    simplify_parser.add_argument('-z', '--zoom', type=float, required=True,
                                 help='Zoom factor')
    simplify_parser.add_argument('-c', '--config', metavar='FILE',
                                 help='LOD config YAML (default: $RINGCAD_LOD_CONFIG)')
    simplify_parser.add_argument('-o', '--output', metavar='FILE',
                                 help='Output JSON file (default: stdout)')

    dxf_parser = subparsers.add_parser('export-dxf', help='Export rings to DXF')
    dxf_parser.add_argument('file', help='Point file (JSON or YAML)')
    dxf_parser.add_argument('output', help='Output DXF file')
    dxf_parser.add_argument('--layer', default='PATHS', help='DXF layer name')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    commands = {
        'info': cmd_info,
        'lod': cmd_lod,
        'simplify': cmd_simplify,
        'export-dxf': cmd_export_dxf,
    }
    try:
        return commands[args.action](args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
