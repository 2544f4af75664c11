## DXF export of ringCAD rings using ezdxf
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
DXF export utilities for ringCAD rings.

Each ring is written as one closed ``LWPOLYLINE`` in model space.  The
drawing is metric (millimeters) and created without ezdxf's default
blocks, which some CAD programs cannot read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

import ezdxf

from ringcad.ring import Ring

logger = logging.getLogger(__name__)

DEFAULT_LAYER = 'PATHS'


def _new_document():
    doc = ezdxf.new(dxfversion='R2010', setup=False)
    doc.header['$MEASUREMENT'] = 1  # metric
    doc.header['$INSUNITS'] = 4  # millimeters
    doc.layers.new(DEFAULT_LAYER, dxfattribs={'color': 7})
    return doc


def rings_to_dxf(rings: Sequence[Ring], layer: str = DEFAULT_LAYER):
    """Build an in-memory ezdxf document holding ``rings``."""

    doc = _new_document()
    if layer not in doc.layers:
        doc.layers.new(layer)
    msp = doc.modelspace()
    for i, ring in enumerate(rings):
        if ring.size < 2:
            logger.debug('skipping ring %d with %d vertices', i, ring.size)
            continue
        msp.add_lwpolyline([(v.x, v.y) for v in ring], format='xy', close=True,
                           dxfattribs={'layer': layer})
    return doc


def write_dxf(rings: Sequence[Ring], output_path: Union[str, Path],
              layer: str = DEFAULT_LAYER) -> bool:
    """Export rings to a DXF file.

    Args:
        rings: rings to export; rings with fewer than 2 vertices are skipped
        output_path: output file; ``.dxf`` is appended if missing
        layer: DXF layer name (default 'PATHS')

    Returns:
        True if the file was written, False otherwise.
    """
    path = Path(output_path)
    if path.suffix.lower() != '.dxf':
        path = path.with_name(path.name + '.dxf')

    doc = rings_to_dxf(rings, layer)
    try:
        doc.saveas(path)
    except OSError:
        logger.exception('DXF export to %s failed', path)
        return False
    logger.info('wrote %d ring(s) to %s', len(rings), path)
    return True


__all__ = ['DEFAULT_LAYER', 'rings_to_dxf', 'write_dxf']
