## stateless computational geometry on ringCAD polygon rings
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

"""stateless computational geometry on **ringCAD** rings

====================
OVERVIEW
====================

The ringcad.geom module is a library of plain functions that read a
``Ring`` by traversal.  Nothing here keeps state between calls.

Functions fall into two groups, and the split is part of the API:

- *in-place* operations (``smooth``, ``scale``, ``translate``,
  ``rotate``, ``fillet``, ``ensure_ccw``) mutate the ring they are
  given and return ``None``.  They need exclusive access to the ring
  for the duration of the call.

- *producing* operations (``offset``, ``generate_circle``,
  ``generate_rectangle``) leave their input alone and return a new
  ``Ring``.

Metrics and predicates (``area``, ``perimeter``, ``point_in_polygon``,
...) only read.

cardinality
===========

Operations that need a minimum number of vertices do not raise when
given too few.  They return the documented "empty" value instead:

- ``perimeter``: 0 for fewer than 2 vertices
- ``area``, ``signed_area``: 0 for fewer than 3 vertices
- ``point_in_polygon``: ``False`` for fewer than 3 vertices
- ``offset``: an empty ring for fewer than 3 vertices
- ``fillet``, ``smooth``: no-op for fewer than 3 vertices
- ``closest_point_on_perimeter``: ``None`` for fewer than 2 vertices

orientation
===========

With the usual y-up axes a positive ``signed_area`` means the ring
winds counter-clockwise.  On a y-down canvas the same ring *looks*
clockwise; the arithmetic does not change.

known approximations
====================

``offset`` moves every vertex along the average of its two edge
normals.  Large offsets relative to feature size produce
self-intersecting output; nothing here repairs that.

``fillet`` samples its arc around the corner vertex itself, at
``radius`` from it, between the directions of the two tangent
points.  It does not construct the inscribed tangent circle.
A neighbor sitting on the corner (a zero-length edge) has no
direction; the corner is then treated as a right angle and an arc
is still inserted.  Run ``geometry_checks.zero_length_edges`` first
to catch such rings.

``centroid`` is the mean of the vertex coordinates.  For the
area-weighted centroid of the enclosed region use
``polygon_centroid``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ringcad.ring import Ring
from ringcad.vertex import Point2D, as_xy

logger = logging.getLogger(__name__)

pi2 = 2.0 * math.pi
epsilon = 5e-6

FILLET_SEGMENTS = 8


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width: float
    height: float

    @property
    def center(self) -> Point2D:
        return Point2D((self.min_x + self.max_x) / 2.0,
                       (self.min_y + self.max_y) / 2.0)


@dataclass(frozen=True)
class PerimeterHit:
    """Result of ``closest_point_on_perimeter``."""

    point: Point2D
    distance: float
    segment_start: Point2D
    segment_end: Point2D


## scalar and vector helpers

def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""

    return int(math.floor(x + 0.5))


def distance(p1: Any, p2: Any) -> float:
    x1, y1 = as_xy(p1)
    x2, y2 = as_xy(p2)
    return math.hypot(x1 - x2, y1 - y2)


def dot(v1: Any, v2: Any) -> float:
    x1, y1 = as_xy(v1)
    x2, y2 = as_xy(v2)
    return x1 * x2 + y1 * y2


def cross(v1: Any, v2: Any) -> float:
    """z component of the 3D cross product of two xy vectors."""

    x1, y1 = as_xy(v1)
    x2, y2 = as_xy(v2)
    return x1 * y2 - y1 * x2


def normalize(v: Any) -> Point2D:
    """Unit vector in the direction of ``v``; the zero vector maps to itself."""

    x, y = as_xy(v)
    length = math.hypot(x, y)
    if length == 0.0:
        return Point2D(0.0, 0.0)
    return Point2D(x / length, y / length)


def _unit(ax: float, ay: float, bx: float, by: float) -> Point2D:
    # unit vector from a to b
    return normalize((bx - ax, by - ay))


## metrics

def perimeter(ring: Ring) -> float:
    if ring.size < 2:
        return 0.0
    total = 0.0
    for v in ring:
        total += math.hypot(v.next.x - v.x, v.next.y - v.y)
    return total


def _shoelace(ring: Ring) -> float:
    total = 0.0
    for v in ring:
        nxt = v.next
        total += v.x * nxt.y - nxt.x * v.y
    return total


def area(ring: Ring) -> float:
    """Unsigned enclosed area by the shoelace formula."""

    if ring.size < 3:
        return 0.0
    return abs(_shoelace(ring)) / 2.0


def signed_area(ring: Ring) -> float:
    """Shoelace area keeping its sign; positive for counter-clockwise rings."""

    if ring.size < 3:
        return 0.0
    return _shoelace(ring) / 2.0


def is_ccw(ring: Ring) -> bool:
    return signed_area(ring) > 0


def ensure_ccw(ring: Ring) -> None:
    if not is_ccw(ring):
        ring.reverse()


def bounding_box(ring: Ring) -> BoundingBox:
    if ring.size == 0:
        return BoundingBox(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for v in ring:
        min_x = min(min_x, v.x)
        min_y = min(min_y, v.y)
        max_x = max(max_x, v.x)
        max_y = max(max_y, v.y)
    return BoundingBox(min_x, min_y, max_x, max_y, max_x - min_x, max_y - min_y)


def centroid(ring: Ring) -> Point2D:
    """Arithmetic mean of the vertex coordinates, ``(0, 0)`` if empty.

    This is *not* the centroid of the enclosed region; vertices
    bunched along one side pull it toward that side.  See
    ``polygon_centroid``.
    """

    if ring.size == 0:
        return Point2D(0.0, 0.0)
    sx = sy = 0.0
    for v in ring:
        sx += v.x
        sy += v.y
    return Point2D(sx / ring.size, sy / ring.size)


def polygon_centroid(ring: Ring) -> Point2D:
    """Area-weighted centroid of the region enclosed by ``ring``.

    Falls back to ``centroid`` when the ring encloses no area.
    """

    if ring.size < 3:
        return centroid(ring)
    a2 = 0.0
    cx = cy = 0.0
    for v in ring:
        nxt = v.next
        c = v.x * nxt.y - nxt.x * v.y
        a2 += c
        cx += (v.x + nxt.x) * c
        cy += (v.y + nxt.y) * c
    if abs(a2) < epsilon:
        return centroid(ring)
    return Point2D(cx / (3.0 * a2), cy / (3.0 * a2))


## predicates

def point_in_polygon(point: Any, ring: Ring) -> bool:
    """Ray-casting inside test.

    A horizontal ray from ``point`` toward +x toggles the result at
    every edge it crosses.  Edges whose endpoints are both above, or
    both at-or-below, the ray are skipped, which also skips horizontal
    edges and keeps the x-intercept division safe.  Points exactly on
    the boundary may land on either side.
    """

    if ring.size < 3:
        return False
    px, py = as_xy(point)
    inside = False
    for v in ring:
        nxt = v.next
        if (v.y > py) != (nxt.y > py):
            x_cross = (nxt.x - v.x) * (py - v.y) / (nxt.y - v.y) + v.x
            if px < x_cross:
                inside = not inside
    return inside


## in-place transforms

def smooth(ring: Ring, iterations: int = 1, factor: float = 0.5) -> None:
    """Laplacian smoothing, in place.

    Each pass moves every vertex toward the mean of itself and its two
    neighbors by ``factor`` (0 leaves it, 1 moves it all the way).
    All new positions of a pass are computed from the old ones before
    any vertex moves.
    """

    if ring.size < 3:
        return
    for _ in range(iterations):
        moved: List[Tuple[float, float]] = []
        for v in ring:
            mx = (v.prev.x + v.x + v.next.x) / 3.0
            my = (v.prev.y + v.y + v.next.y) / 3.0
            moved.append((v.x + (mx - v.x) * factor,
                          v.y + (my - v.y) * factor))
        for v, (x, y) in zip(ring, moved):
            v.set_position(x, y)


def scale(ring: Ring, sx: float, sy: Optional[float] = None,
          cx: float = 0.0, cy: float = 0.0) -> None:
    if sy is None:
        sy = sx
    for v in ring:
        v.set_position(cx + (v.x - cx) * sx, cy + (v.y - cy) * sy)


def translate(ring: Ring, dx: float, dy: float) -> None:
    for v in ring:
        v.set_position(v.x + dx, v.y + dy)


def rotate(ring: Ring, angle: float, cx: float = 0.0, cy: float = 0.0) -> None:
    """Rotate counter-clockwise by ``angle`` radians about ``(cx, cy)``."""

    c = math.cos(angle)
    s = math.sin(angle)
    for v in ring:
        x = v.x - cx
        y = v.y - cy
        v.set_position(cx + x * c - y * s, cy + x * s + y * c)


## proximity

def closest_point_on_segment(point: Any, a: Any, b: Any) -> Tuple[Point2D, float]:
    """Closest point to ``point`` on segment ``ab``, and its distance."""

    px, py = as_xy(point)
    ax, ay = as_xy(a)
    bx, by = as_xy(b)
    dx = bx - ax
    dy = by - ay
    if dx == 0.0 and dy == 0.0:
        return Point2D(ax, ay), math.hypot(px - ax, py - ay)
    t = ((px - ax) * dx + (py - ay) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    q = Point2D(ax + t * dx, ay + t * dy)
    return q, math.hypot(px - q.x, py - q.y)


def closest_point_on_perimeter(point: Any, ring: Ring) -> Optional[PerimeterHit]:
    if ring.size < 2:
        return None
    best = None
    for v in ring:
        q, d = closest_point_on_segment(point, v, v.next)
        if best is None or d < best.distance:
            best = PerimeterHit(q, d, v.to_point(), v.next.to_point())
    return best


def snap_to_grid(point: Any, grid_size: float) -> Point2D:
    if grid_size <= 0:
        raise ValueError('grid size must be positive: {}'.format(grid_size))
    x, y = as_xy(point)
    return Point2D(round_half_up(x / grid_size) * grid_size,
                   round_half_up(y / grid_size) * grid_size)


## shape editing

def offset(ring: Ring, dist: float) -> Ring:
    """Approximate parallel curve at ``dist`` along averaged edge normals.

    The normal of an edge is its unit direction turned a quarter turn
    to the left of travel, so for a ring with positive signed area a
    positive ``dist`` moves vertices inward and a negative one outward.
    Each vertex moves exactly ``|dist|``; edges meeting at a corner
    therefore move less than that.  Returns a new ring.
    """

    if ring.size < 3:
        logger.debug('offset: ring has %d vertices, returning empty ring', ring.size)
        return Ring()
    pts = []
    for v in ring:
        e1 = _unit(v.prev.x, v.prev.y, v.x, v.y)
        e2 = _unit(v.x, v.y, v.next.x, v.next.y)
        n = normalize(((-e1.y - e2.y) / 2.0, (e1.x + e2.x) / 2.0))
        pts.append((v.x + n.x * dist, v.y + n.y * dist))
    return Ring(pts)


def arc_points(start: Any, end: Any, center: Any, radius: float,
               segments: int) -> List[Point2D]:
    """``segments + 1`` points on a circle from ``start``'s angle to ``end``'s.

    The sweep always runs counter-clockwise; a negative raw angle
    difference is wrapped by a full turn.
    """

    sx, sy = as_xy(start)
    ex, ey = as_xy(end)
    cx, cy = as_xy(center)
    a0 = math.atan2(sy - cy, sx - cx)
    a1 = math.atan2(ey - cy, ex - cx)
    sweep = a1 - a0
    if sweep < 0:
        sweep += pi2
    pts = []
    for i in range(segments + 1):
        ang = a0 + sweep * i / segments
        pts.append(Point2D(cx + math.cos(ang) * radius, cy + math.sin(ang) * radius))
    return pts


def fillet(ring: Ring, index: int, radius: float) -> None:
    """Replace the corner at ``index`` with a sampled arc, in place.

    Does nothing for rings with fewer than 3 vertices, a non-positive
    radius, an out-of-range index, or a corner whose neighbor
    directions are collinear (angle 0 or pi).  On success the ring grows by
    ``FILLET_SEGMENTS`` vertices and the arc starts at ``index``.
    """

    if ring.size < 3 or radius <= 0:
        logger.debug('fillet: skipped (size=%d, radius=%s)', ring.size, radius)
        return
    corner = ring.at(index)
    if corner is None:
        logger.debug('fillet: index %d out of range', index)
        return

    u1 = _unit(corner.x, corner.y, corner.prev.x, corner.prev.y)
    u2 = _unit(corner.x, corner.y, corner.next.x, corner.next.y)
    angle = math.acos(max(-1.0, min(1.0, dot(u1, u2))))
    if angle < epsilon or math.pi - angle < epsilon:
        logger.debug('fillet: degenerate corner at index %d (angle=%s)', index, angle)
        return

    tangent = radius / math.tan(angle / 2.0)
    start = (corner.x + u1.x * tangent, corner.y + u1.y * tangent)
    end = (corner.x + u2.x * tangent, corner.y + u2.y * tangent)
    arc = arc_points(start, end, corner, radius, FILLET_SEGMENTS)

    ring.remove_ref(corner)
    for i, p in enumerate(arc):
        ring.insert(p.x, p.y, index + i)


## generators

def generate_circle(center: Any, radius: float, segments: int = 32) -> Ring:
    """Regular ``segments``-gon inscribed in the circle, starting at angle 0."""

    cx, cy = as_xy(center)
    pts = []
    for i in range(segments):
        ang = pi2 * i / segments
        pts.append((cx + math.cos(ang) * radius, cy + math.sin(ang) * radius))
    return Ring(pts)


def generate_rectangle(x: float, y: float, width: float, height: float) -> Ring:
    """Corners from ``(x, y)``: top-left, top-right, bottom-right,
    bottom-left on a y-down canvas."""

    return Ring([(x, y), (x + width, y), (x + width, y + height), (x, y + height)])


__all__ = [
    'BoundingBox',
    'FILLET_SEGMENTS',
    'PerimeterHit',
    'arc_points',
    'area',
    'bounding_box',
    'centroid',
    'closest_point_on_perimeter',
    'closest_point_on_segment',
    'cross',
    'distance',
    'dot',
    'ensure_ccw',
    'epsilon',
    'fillet',
    'generate_circle',
    'generate_rectangle',
    'is_ccw',
    'normalize',
    'offset',
    'perimeter',
    'pi2',
    'point_in_polygon',
    'polygon_centroid',
    'rotate',
    'round_half_up',
    'scale',
    'signed_area',
    'smooth',
    'snap_to_grid',
    'translate',
]
