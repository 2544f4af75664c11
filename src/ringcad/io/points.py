## point-record ingress and egress for ringCAD rings
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

"""Point-record conversion at the ringCAD boundary.

Scripting hosts hand shapes over as ordered sequences of coordinate
records, and renderers/exporters want them back the same way.  A
record may be

- a mapping with ``x``, ``y`` and optional ``z`` keys,
- an object with ``x``/``y``/``z`` attributes, or
- a sequence ``(x, y[, z])``.

Missing or ``None`` coordinates read as 0.  ``z`` is carried through
ingress but ignored by rings, and egress always reports ``z = 0``.

Files use a small JSON (or YAML) document::

    {"schema": "ringcad-rings-json-v0.1",
     "rings": [{"points": [{"x": 0, "y": 0, "z": 0}, ...]}, ...]}

``load_rings`` also accepts a bare list of records (one ring) or a
list of record lists (several rings).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np
import yaml

from ringcad.ring import Ring
from ringcad.vertex import is_point_sequence

SCHEMA_ID = "ringcad-rings-json-v0.1"

Point3 = Tuple[float, float, float]


def _coord(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"bad coordinate value: {value!r}") from exc


def point_from_record(record: Any) -> Point3:
    """Coordinates of one ingress record; sequences include numpy rows."""

    if isinstance(record, Mapping):
        return (_coord(record.get("x")), _coord(record.get("y")), _coord(record.get("z")))
    if is_point_sequence(record):
        comps = list(record) + [None] * (3 - len(record))
        return (_coord(comps[0]), _coord(comps[1]), _coord(comps[2]))
    return (_coord(getattr(record, "x", None)),
            _coord(getattr(record, "y", None)),
            _coord(getattr(record, "z", None)))


def points_from_records(records: Iterable[Any]) -> List[Point3]:
    if records is None:
        return []
    return [point_from_record(r) for r in records]


def rings_from_records(*arrays: Iterable[Any]) -> List[Ring]:
    """One ring per record array, in argument order."""

    return [Ring(points_from_records(arr)) for arr in arrays]


def to_points(ring: Ring) -> List[Point3]:
    return ring.to_points()


def to_records(ring: Ring) -> List[Dict[str, float]]:
    return [{"x": x, "y": y, "z": z} for x, y, z in ring.to_points()]


def to_array(ring: Ring) -> np.ndarray:
    """``N x 3`` float array of ``(x, y, 0)`` rows."""

    if ring.size == 0:
        return np.zeros((0, 3))
    return np.asarray(ring.to_points(), dtype=float)


def rings_to_json(rings: Sequence[Ring]) -> Dict[str, Any]:
    return {
        "schema": SCHEMA_ID,
        "rings": [{"points": to_records(r)} for r in rings],
    }


def _is_record_list(seq: Any) -> bool:
    if not isinstance(seq, list):
        return False
    return all(isinstance(r, Mapping) or
               (isinstance(r, (list, tuple)) and r and
                not isinstance(r[0], (list, tuple, Mapping)))
               for r in seq)


def rings_from_json(doc: Any) -> List[Ring]:
    """Parse a rings document, a list of records, or a list of record lists."""

    if isinstance(doc, Mapping):
        schema = doc.get("schema")
        if schema != SCHEMA_ID:
            raise ValueError(f"unsupported rings schema: {schema!r}")
        entries = doc.get("rings")
        if not isinstance(entries, list):
            raise ValueError("rings document has no 'rings' list")
        rings = []
        for entry in entries:
            if not isinstance(entry, Mapping) or "points" not in entry:
                raise ValueError(f"bad ring entry: {entry!r}")
            rings.append(Ring(points_from_records(entry["points"])))
        return rings
    if _is_record_list(doc):
        return [Ring(points_from_records(doc))]
    if isinstance(doc, list) and all(_is_record_list(arr) for arr in doc):
        return rings_from_records(*doc)
    raise ValueError("expected a rings document or a list of point records")


def load_rings(path: Union[str, Path]) -> List[Ring]:
    """Read rings from a ``.json``, ``.yaml`` or ``.yml`` file."""

    src = Path(path)
    text = src.read_text(encoding="utf-8")
    if src.suffix.lower() in (".yaml", ".yml"):
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"could not parse {src}: {exc}") from exc
    else:
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"could not parse {src}: {exc}") from exc
    return rings_from_json(doc)


def save_rings(rings: Sequence[Ring], path: Union[str, Path]) -> None:
    Path(path).write_text(json.dumps(rings_to_json(rings), indent=2), encoding="utf-8")


__all__ = [
    "SCHEMA_ID",
    "load_rings",
    "point_from_record",
    "points_from_records",
    "rings_from_json",
    "rings_from_records",
    "rings_to_json",
    "save_rings",
    "to_array",
    "to_points",
    "to_records",
]
