## circular doubly-linked vertex ring for ringCAD
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
Rings
=====

A ``Ring`` is a closed polygon outline stored as a circular,
doubly-linked list of ``Vertex`` instances.  The ring owns its
vertices: it creates them on insertion and severs their links on
removal, so a vertex handle held by a caller is either live in
exactly one ring or detached.

Structural invariants, checked by ``validate()``:

- ``size == 0`` if and only if ``head is None``
- a one-vertex ring links its vertex to itself in both directions
- otherwise, following ``next`` ``size`` times from any vertex returns
  to it, and ``v.next.prev is v`` and ``v.prev.next is v`` everywhere

Index-based operations never raise for a bad index or an empty ring;
they return ``None`` (or do nothing) instead, and callers check the
result.  Indices are zero-based and counted forward from ``head``.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from ringcad.vertex import Point2D, Vertex, VertexMeta, as_xy


class ClosestVertex(NamedTuple):
    vertex: Vertex
    distance: float
    index: int


class Ring:
    """Circular doubly-linked list of vertices forming a closed outline."""

    def __init__(self, points: Optional[Iterable[Any]] = None):
        self._head: Optional[Vertex] = None
        self._size = 0
        if points is not None:
            for p in points:
                x, y = as_xy(p)
                self.insert(x, y)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "Ring":
        """Build a ring from scripting-host point records (see ``ringcad.io.points``)."""

        from ringcad.io.points import points_from_records
        return cls(points_from_records(records))

    ## properties

    @property
    def size(self) -> int:
        return self._size

    @property
    def head(self) -> Optional[Vertex]:
        return self._head

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def first(self) -> Optional[Vertex]:
        return self._head

    @property
    def last(self) -> Optional[Vertex]:
        if self._head is None:
            return None
        return self._head.prev

    def __len__(self):
        return self._size

    def __bool__(self):
        return self._size > 0

    def __iter__(self) -> Iterator[Vertex]:
        current = self._head
        for _ in range(self._size):
            yield current
            current = current.next

    def __repr__(self):
        return 'Ring({!r})'.format([tuple(p) for p in self.to_list()])

    def __str__(self):
        if self._size == 0:
            return 'Ring: []'
        pts = ' -> '.join('({}, {})'.format(v.x, v.y) for v in self)
        return 'Ring[{}]: {} -> (circular)'.format(self._size, pts)

    ## insertion and removal

    def insert(self, x: float, y: float, index: Optional[int] = None,
               meta: Optional[VertexMeta] = None) -> Vertex:
        """Insert a new vertex and return it.

        With no ``index``, or an index at or past the end, the vertex
        is appended (spliced in just before ``head``).  Otherwise it
        takes position ``index`` and the vertex previously there moves
        up by one; ``index == 0`` makes the new vertex the head.
        Negative indices are treated as zero.
        """

        vtx = Vertex(x, y, meta)
        if self._head is None:
            vtx.next = vtx
            vtx.prev = vtx
            self._head = vtx
        elif index is None or index >= self._size:
            self._link_before(vtx, self._head)
        else:
            index = max(0, index)
            self._link_before(vtx, self.at(index))
            if index == 0:
                self._head = vtx
        self._size += 1
        return vtx

    @staticmethod
    def _link_before(vtx: Vertex, target: Vertex) -> None:
        before = target.prev
        before.next = vtx
        vtx.prev = before
        vtx.next = target
        target.prev = vtx

    def remove_at(self, index: int) -> Optional[Vertex]:
        """Remove the vertex at ``index`` and return it, or ``None``."""

        vtx = self.at(index)
        if vtx is None:
            return None
        return self.remove_ref(vtx)

    def remove_ref(self, vtx: Vertex) -> Optional[Vertex]:
        """Unlink ``vtx`` from the ring and return it.

        Returns ``None`` for an empty ring or a detached vertex.  The
        caller must pass a vertex that belongs to this ring; handles
        from other rings are not detected.
        """

        if self._size == 0 or vtx is None or vtx.next is None:
            return None
        if self._size == 1:
            if vtx is not self._head:
                return None
            self._head = None
        else:
            vtx.prev.next = vtx.next
            vtx.next.prev = vtx.prev
            if vtx is self._head:
                self._head = vtx.next
        vtx.next = None
        vtx.prev = None
        self._size -= 1
        return vtx

    def clear(self) -> None:
        """Detach every vertex and empty the ring."""

        current = self._head
        for _ in range(self._size):
            nxt = current.next
            current.next = None
            current.prev = None
            current = nxt
        self._head = None
        self._size = 0

    ## access

    def at(self, index: int) -> Optional[Vertex]:
        """Return the vertex at ``index`` or ``None`` if out of range.

        Walks forward from ``head`` for indices in the first half and
        backward for the rest, so at most ``size/2`` steps are taken.
        """

        if self._size == 0 or index < 0 or index >= self._size:
            return None
        current = self._head
        if index <= self._size / 2:
            for _ in range(index):
                current = current.next
        else:
            for _ in range(self._size - index):
                current = current.prev
        return current

    def traverse(self, visit: Callable[[Vertex, int], Any]) -> None:
        """Call ``visit(vertex, index)`` for each vertex, in ring order."""

        current = self._head
        for i in range(self._size):
            # grab the successor first so visit may relink current
            nxt = current.next
            visit(current, i)
            current = nxt

    def traverse_reverse(self, visit: Callable[[Vertex, int], Any]) -> None:
        """Call ``visit(vertex, index)`` for each vertex, tail to head."""

        if self._head is None:
            return
        current = self._head.prev
        for i in range(self._size - 1, -1, -1):
            prv = current.prev
            visit(current, i)
            current = prv

    def closest(self, x: float, y: float) -> Optional[ClosestVertex]:
        """Return the vertex nearest ``(x, y)`` with its distance and index.

        Ties go to the vertex met first in traversal order.
        """

        best = None
        for i, vtx in enumerate(self):
            d = vtx.distance_to((x, y))
            if best is None or d < best.distance:
                best = ClosestVertex(vtx, d, i)
        return best

    def contains(self, vtx: Vertex) -> bool:
        return self.index_of(vtx) >= 0

    def index_of(self, vtx: Vertex) -> int:
        for i, v in enumerate(self):
            if v is vtx:
                return i
        return -1

    ## conversion

    def vertices(self) -> List[Vertex]:
        return list(self)

    def to_list(self) -> List[Point2D]:
        return [v.to_point() for v in self]

    def to_points(self) -> List[Tuple[float, float, float]]:
        """Flatten to ``(x, y, 0.0)`` triples for rendering and export."""

        return [(v.x, v.y, 0.0) for v in self]

    ## whole-ring operations

    def clone(self) -> "Ring":
        """Deep copy; metadata is copied with a freshly generated id."""

        dup = Ring()
        for v in self:
            meta = v.meta.copy() if v.meta is not None else None
            dup.insert(v.x, v.y, meta=meta)
        return dup

    def reverse(self) -> None:
        """Reverse traversal order in place.

        The old tail becomes the new head, so ``to_list()`` afterwards
        is the old ``to_list()`` reversed.
        """

        if self._size <= 1:
            return
        current = self._head
        for _ in range(self._size):
            nxt = current.next
            current.next, current.prev = current.prev, current.next
            current = nxt
        # links are swapped, so head.next is the old tail
        self._head = self._head.next

    def validate(self) -> bool:
        """Return ``True`` if all structural invariants hold."""

        if self._size == 0:
            return self._head is None
        if self._head is None:
            return False
        if self._size == 1:
            return self._head.next is self._head and self._head.prev is self._head

        seen = set()
        current = self._head
        while True:
            if current.next is None or current.prev is None:
                return False
            if current.next.prev is not current or current.prev.next is not current:
                return False
            seen.add(id(current))
            if len(seen) > self._size:
                return False
            current = current.next
            if current is self._head:
                break
        return len(seen) == self._size


__all__ = [
    'ClosestVertex',
    'Ring',
]
