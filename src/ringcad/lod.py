## zoom-driven level-of-detail policy for ringCAD rings
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
Level of detail
===============

The LOD controller maps a canvas zoom factor to resolution and
smoothing parameters, and offers zoom-aware variants of circle
generation, smoothing, simplification and Bézier sampling.

Everything here is a pure function of ``(zoom, config)`` plus its
ring arguments: there is no controller object and no state.  Every
function takes an optional ``LODConfig``; ``None`` means
``DEFAULT_LOD_CONFIG``.

The zoom ratio used throughout is::

    ratio = (clamp(zoom, min_zoom, max_zoom) - min_zoom) / (max_zoom - min_zoom)

so 0 is fully zoomed out and 1 fully zoomed in.  Node display
decisions (``show_nodes``, ``node_size``) and the rendering hints use
the raw zoom, not the clamped one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Sequence

import numpy as np

from ringcad.geom import generate_circle, round_half_up, smooth
from ringcad.ring import Ring
from ringcad.vertex import Point2D, as_xy

logger = logging.getLogger(__name__)

ZOOM_LIMITS = (0.2, 5.0)


@dataclass(frozen=True)
class LODConfig:
    """Tunable LOD parameters."""

    min_zoom: float = 0.2
    max_zoom: float = 5.0
    min_segments: int = 4
    max_segments: int = 64
    smoothing_factor: float = 0.7

    def __post_init__(self):
        if not self.max_zoom > self.min_zoom:
            raise ValueError('max_zoom ({}) must exceed min_zoom ({})'.format(
                self.max_zoom, self.min_zoom))
        if self.min_segments < 1:
            raise ValueError('min_segments must be >= 1, got {}'.format(self.min_segments))
        if self.max_segments < self.min_segments:
            raise ValueError('max_segments ({}) must be >= min_segments ({})'.format(
                self.max_segments, self.min_segments))
        if not 0.0 <= self.smoothing_factor <= 1.0:
            raise ValueError('smoothing_factor must lie in [0, 1], got {}'.format(
                self.smoothing_factor))

    def replace(self, **overrides) -> "LODConfig":
        """Return a copy with ``overrides`` applied."""

        return replace(self, **overrides)


DEFAULT_LOD_CONFIG = LODConfig()


@dataclass(frozen=True)
class LODParams:
    segments: int
    smoothing_iterations: int
    smoothing_factor: float
    show_nodes: bool
    node_size: float


@dataclass(frozen=True)
class RenderingHints:
    show_nodes: bool
    node_size: float
    line_width: float
    show_details: bool
    anti_alias: bool


def _clamp(x, lo, hi):
    return max(lo, min(hi, x))


def clamp_zoom(zoom: float, lo: float = ZOOM_LIMITS[0], hi: float = ZOOM_LIMITS[1]) -> float:
    """Clamp a zoom factor to the range canvas code keeps it in."""

    return _clamp(zoom, lo, hi)


def zoom_ratio(zoom: float, config: Optional[LODConfig] = None) -> float:
    cfg = config or DEFAULT_LOD_CONFIG
    z = _clamp(zoom, cfg.min_zoom, cfg.max_zoom)
    return (z - cfg.min_zoom) / (cfg.max_zoom - cfg.min_zoom)


def calculate_lod(zoom: float, config: Optional[LODConfig] = None) -> LODParams:
    """Resolution and smoothing parameters for ``zoom``.

    ``segments`` interpolates linearly from ``min_segments`` (zoomed
    out) to ``max_segments`` (zoomed in).  Smoothing runs the other
    way: up to 3 iterations at full ``smoothing_factor`` when zoomed
    out, none when zoomed in.
    """

    cfg = config or DEFAULT_LOD_CONFIG
    ratio = zoom_ratio(zoom, cfg)
    segments = round_half_up(cfg.min_segments + (cfg.max_segments - cfg.min_segments) * ratio)
    return LODParams(
        segments=segments,
        smoothing_iterations=round_half_up((1.0 - ratio) * 3),
        smoothing_factor=cfg.smoothing_factor * (1.0 - ratio),
        show_nodes=zoom > 1.5,
        node_size=_clamp(zoom * 2, 2, 8),
    )


def rendering_hints(zoom: float, config: Optional[LODConfig] = None) -> RenderingHints:
    lod = calculate_lod(zoom, config)
    return RenderingHints(
        show_nodes=lod.show_nodes,
        node_size=lod.node_size,
        line_width=_clamp(zoom * 0.8, 1, 3),
        show_details=zoom > 1.0,
        anti_alias=zoom < 3.0,
    )


def adaptive_circle(center: Any, radius: float, zoom: float,
                    config: Optional[LODConfig] = None) -> Ring:
    lod = calculate_lod(zoom, config)
    return generate_circle(center, radius, lod.segments)


def adaptive_smoothing(ring: Ring, zoom: float, config: Optional[LODConfig] = None) -> Ring:
    """Smoothed copy of ``ring``; the input is never modified."""

    lod = calculate_lod(zoom, config)
    out = ring.clone()
    if lod.smoothing_iterations > 0 and lod.smoothing_factor > 0:
        smooth(out, lod.smoothing_iterations, lod.smoothing_factor)
    return out


def simplify(ring: Ring, zoom: float, config: Optional[LODConfig] = None) -> Ring:
    """Decimate ``ring`` by keeping every ``step``-th vertex.

    Returns ``ring`` itself, not a copy, when zoomed in past 2.0 or
    when it already has no more vertices than the LOD segment count.
    A ring with at least 3 vertices always simplifies to at least 3.
    """

    lod = calculate_lod(zoom, config)
    size = ring.size
    if zoom > 2.0 or size <= lod.segments:
        return ring

    target = max(3, min(size, lod.segments))
    step = max(1, size // target)
    kept = [v.to_point() for i, v in enumerate(ring) if i % step == 0]

    if len(kept) < 3 and size >= 3:
        logger.debug('simplify: %d of %d vertices kept, falling back to thirds',
                     len(kept), size)
        third = size / 3.0
        kept = [ring.at(int(i * third)).to_point() for i in range(3)]

    return Ring(kept)


def bezier_point(control_points: Sequence[Any], t: float) -> Point2D:
    """Evaluate a Bézier curve of any degree at ``t`` by De Casteljau."""

    pts = [as_xy(p) for p in control_points]
    if not pts:
        return Point2D(0.0, 0.0)
    while len(pts) > 1:
        pts = [(a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1]))
               for a, b in zip(pts[:-1], pts[1:])]
    return Point2D(*pts[0])


def _bezier_sample(ctrl: np.ndarray, t: np.ndarray) -> np.ndarray:
    # De Casteljau for all parameter values at once
    if ctrl.shape[0] == 0:
        return np.zeros((len(t), 2))
    if ctrl.shape[0] == 1:
        return np.repeat(ctrl, len(t), axis=0)
    pts = np.broadcast_to(ctrl, (len(t),) + ctrl.shape).copy()
    for _ in range(1, ctrl.shape[0]):
        pts = (1.0 - t)[:, None, None] * pts[:, :-1, :] + t[:, None, None] * pts[:, 1:, :]
    return pts[:, 0, :]


def adaptive_bezier(control_points: Sequence[Any], zoom: float,
                    config: Optional[LODConfig] = None) -> Ring:
    """Sample a Bézier curve at ``segments + 1`` evenly spaced parameters.

    The result includes both end points, so for a closed-looking ring
    the first and last vertices coincide when the curve ends where it
    starts.
    """

    lod = calculate_lod(zoom, config)
    steps = lod.segments
    ctrl = np.asarray([as_xy(p) for p in control_points], dtype=float).reshape(-1, 2)
    t = np.arange(steps + 1, dtype=float) / steps
    samples = _bezier_sample(ctrl, t)
    return Ring(samples.tolist())


__all__ = [
    'DEFAULT_LOD_CONFIG',
    'LODConfig',
    'LODParams',
    'RenderingHints',
    'ZOOM_LIMITS',
    'adaptive_bezier',
    'adaptive_circle',
    'adaptive_smoothing',
    'bezier_point',
    'calculate_lod',
    'clamp_zoom',
    'rendering_hints',
    'simplify',
    'zoom_ratio',
]
