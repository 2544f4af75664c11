## vertex and point primitives for ringCAD polygon rings
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
Vertices and points
===================

A ``Vertex`` is one mutable corner of a ``Ring``.  It carries its
coordinates, the two ring links (``next`` and ``prev``) and, only when
some caller asks for it, a ``VertexMeta`` record holding display
information (identity, selection flag, color and role).

The links are structural: they say who the neighbors are, nothing
more.  A vertex belongs to exactly one ring at a time, and the ring
is responsible for wiring and unwiring it.  A detached vertex has
``next is None and prev is None``.

Anything that returns "a point" returns a ``Point2D`` named tuple, so
results compare equal to plain ``(x, y)`` tuples.  Functions that
accept a point accept anything ``as_xy()`` understands: a vertex, a
``Point2D``, an ``(x, y[, z])`` sequence, a mapping with ``x`` and
``y`` keys, or an object with ``x`` and ``y`` attributes.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple

DEFAULT_VERTEX_COLOR = '#3498db'


class Point2D(NamedTuple):
    """Immutable 2D point."""

    x: float
    y: float


class VertexRole(Enum):
    VERTEX = 'vertex'
    CONTROL = 'control'
    ANCHOR = 'anchor'


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class VertexMeta:
    """Display metadata attached to a vertex on demand."""

    id: str = field(default_factory=_new_id)
    selected: bool = False
    color: str = DEFAULT_VERTEX_COLOR
    role: VertexRole = VertexRole.VERTEX

    def copy(self, fresh_id: bool = True) -> "VertexMeta":
        """Return a copy, with a newly generated ``id`` unless told otherwise."""

        if fresh_id:
            return replace(self, id=_new_id())
        return replace(self)


def is_point_sequence(p: Any) -> bool:
    # tuples, lists, numpy rows and other indexable containers; not strings
    if isinstance(p, (str, bytes)):
        return False
    return hasattr(p, '__len__') and hasattr(p, '__getitem__')


def as_xy(p: Any) -> Tuple[float, float]:
    """Return the ``(x, y)`` coordinates of a point-like value as floats."""

    if isinstance(p, Vertex):
        return p.x, p.y
    if isinstance(p, Mapping):
        if 'x' not in p or 'y' not in p:
            raise ValueError('point mapping needs x and y keys: {!r}'.format(p))
        return float(p['x']), float(p['y'])
    if is_point_sequence(p):
        if len(p) < 2:
            raise ValueError('point sequence needs at least two components: {!r}'.format(p))
        return float(p[0]), float(p[1])
    if hasattr(p, 'x') and hasattr(p, 'y'):
        return float(p.x), float(p.y)
    raise ValueError('bad point value: {!r}'.format(p))


class Vertex:
    """One corner of a ring, linked to its neighbors."""

    __slots__ = ('x', 'y', 'next', 'prev', 'meta')

    def __init__(self, x: float, y: float, meta: Optional[VertexMeta] = None):
        self.x = float(x)
        self.y = float(y)
        self.next: Optional[Vertex] = None
        self.prev: Optional[Vertex] = None
        self.meta = meta

    def __repr__(self):
        return 'Vertex({}, {})'.format(self.x, self.y)

    @property
    def detached(self) -> bool:
        return self.next is None and self.prev is None

    def to_point(self) -> Point2D:
        return Point2D(self.x, self.y)

    def set_position(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def distance_to(self, other: Any) -> float:
        """Euclidean distance to another vertex or point-like value."""

        ox, oy = as_xy(other)
        return math.hypot(self.x - ox, self.y - oy)

    def ensure_meta(self, **kwargs) -> VertexMeta:
        """Return this vertex's metadata, creating it if needed.

        Keyword arguments override the corresponding fields of newly
        created metadata; they are ignored if metadata already exists.
        """

        if self.meta is None:
            self.meta = VertexMeta(**kwargs)
        return self.meta


__all__ = [
    'DEFAULT_VERTEX_COLOR',
    'Point2D',
    'Vertex',
    'VertexMeta',
    'VertexRole',
    'as_xy',
    'is_point_sequence',
]
