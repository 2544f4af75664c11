## structural and shape checks for ringCAD rings
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

"""Validation helpers for ringCAD rings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ringcad.geom import epsilon, signed_area
from ringcad.ring import Ring


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok


def zero_length_edges(ring: Ring, tol: float = epsilon) -> List[int]:
    """Indices ``i`` whose edge to vertex ``i + 1`` is shorter than ``tol``."""

    if ring.size < 2:
        return []
    return [i for i, v in enumerate(ring) if v.distance_to(v.next) <= tol]


def check_ring(ring: Ring, tol: float = epsilon) -> CheckResult:
    """Check ring structure and flag shapes most operations treat as degenerate.

    ``ok`` reflects the linked-list invariants only; the warnings are
    advisory.
    """

    if not ring.validate():
        return CheckResult(False, ['ring links are inconsistent'])

    warnings: List[str] = []
    if ring.size < 3:
        warnings.append(f'{ring.size} vertices; area, containment and offset need 3')
        return CheckResult(True, warnings)

    short = zero_length_edges(ring, tol)
    if short:
        warnings.append(f'zero-length edges at indices: {short}')
    sa = signed_area(ring)
    if abs(sa) <= tol:
        warnings.append('ring encloses no area')
    elif sa < 0:
        warnings.append('ring winds clockwise')
    return CheckResult(True, warnings)


__all__ = [
    'CheckResult',
    'check_ring',
    'zero_length_edges',
]
