import json
from types import SimpleNamespace

import numpy as np
import pytest

from ringcad.geom import generate_rectangle
from ringcad.io.points import (
    SCHEMA_ID,
    load_rings,
    point_from_record,
    points_from_records,
    rings_from_json,
    rings_from_records,
    rings_to_json,
    save_rings,
    to_array,
    to_points,
    to_records,
)
from ringcad.ring import Ring


def coords(ring):
    return [tuple(p) for p in ring.to_list()]


class TestIngress:

    def test_record_shapes(self):
        assert point_from_record({'x': 1, 'y': 2, 'z': 3}) == (1.0, 2.0, 3.0)
        assert point_from_record({'x': 1, 'y': 2}) == (1.0, 2.0, 0.0)
        assert point_from_record((4, 5)) == (4.0, 5.0, 0.0)
        assert point_from_record([4, 5, 6]) == (4.0, 5.0, 6.0)
        assert point_from_record(SimpleNamespace(x=7, y=8)) == (7.0, 8.0, 0.0)

    def test_missing_coordinates_read_as_zero(self):
        assert point_from_record({'x': None, 'y': 2}) == (0.0, 2.0, 0.0)
        assert point_from_record({}) == (0.0, 0.0, 0.0)
        assert point_from_record(object()) == (0.0, 0.0, 0.0)

    def test_bad_coordinate(self):
        with pytest.raises(ValueError):
            point_from_record({'x': 'left', 'y': 0})

    def test_points_from_records(self):
        assert points_from_records(None) == []
        assert points_from_records([(1, 2), {'x': 3, 'y': 4}]) == [
            (1.0, 2.0, 0.0), (3.0, 4.0, 0.0)]

    def test_rings_from_records(self):
        rings = rings_from_records([(0, 0), (1, 0), (1, 1)], [], [{'x': 5, 'y': 5}])
        assert [r.size for r in rings] == [3, 0, 1]
        assert coords(rings[2]) == [(5, 5)]
        assert all(r.validate() for r in rings)

    def test_ring_from_records(self):
        ring = Ring.from_records([{'x': 1, 'y': 1, 'z': 9}, {'x': 2, 'y': 1}])
        assert coords(ring) == [(1, 1), (2, 1)]


class TestEgress:

    def test_points_and_records(self):
        ring = Ring([(1, 2), (3, 4)])
        assert to_points(ring) == [(1, 2, 0.0), (3, 4, 0.0)]
        assert to_records(ring) == [
            {'x': 1, 'y': 2, 'z': 0.0},
            {'x': 3, 'y': 4, 'z': 0.0},
        ]
        assert to_records(Ring()) == []

    def test_to_array(self):
        arr = to_array(generate_rectangle(0, 0, 2, 3))
        assert arr.shape == (4, 3)
        assert np.allclose(arr[:, 2], 0)
        assert np.allclose(arr[2], [2, 3, 0])
        assert to_array(Ring()).shape == (0, 3)

    def test_array_rows_read_back(self):
        ring = generate_rectangle(0, 0, 2, 3)
        arr = to_array(ring)
        assert points_from_records(arr) == to_points(ring)
        assert coords(Ring(arr)) == coords(ring)
        assert coords(rings_from_records(arr)[0]) == coords(ring)

    def test_xy_array_rows(self):
        arr = np.array([[1.5, 2.0], [3.0, -1.0]])
        assert points_from_records(arr) == [(1.5, 2.0, 0.0), (3.0, -1.0, 0.0)]
        assert coords(Ring(arr)) == [(1.5, 2.0), (3.0, -1.0)]


class TestDocuments:

    def test_rings_to_json(self):
        doc = rings_to_json([Ring([(0, 0), (1, 0), (0, 1)]), Ring()])
        assert doc['schema'] == SCHEMA_ID
        assert len(doc['rings']) == 2
        assert doc['rings'][0]['points'][1] == {'x': 1, 'y': 0, 'z': 0.0}
        assert doc['rings'][1]['points'] == []

    def test_rings_from_json_forms(self):
        single = rings_from_json([{'x': 0, 'y': 0}, {'x': 1, 'y': 1}])
        assert len(single) == 1
        assert single[0].size == 2

        several = rings_from_json([[[0, 0], [1, 0]], [[2, 2], [3, 3], [4, 2]]])
        assert [r.size for r in several] == [2, 3]

        doc = {'schema': SCHEMA_ID, 'rings': [{'points': [[1, 2]]}]}
        assert coords(rings_from_json(doc)[0]) == [(1, 2)]

    @pytest.mark.parametrize('doc', [
        {'schema': 'other', 'rings': []},
        {'schema': SCHEMA_ID},
        {'schema': SCHEMA_ID, 'rings': [{'vertices': []}]},
        42,
        'ring',
    ])
    def test_rings_from_json_rejects(self, doc):
        with pytest.raises(ValueError):
            rings_from_json(doc)

    def test_save_and_load_json(self, tmp_path):
        path = tmp_path / 'shapes.json'
        src = [generate_rectangle(0, 0, 10, 5), Ring([(1, 1), (2, 2), (3, 1)])]
        save_rings(src, path)
        assert json.loads(path.read_text())['schema'] == SCHEMA_ID
        loaded = load_rings(path)
        assert [coords(r) for r in loaded] == [coords(r) for r in src]

    def test_load_yaml(self, tmp_path):
        path = tmp_path / 'shape.yaml'
        path.write_text('- {x: 0, y: 0}\n- {x: 4, y: 0}\n- {x: 4, y: 3}\n')
        rings = load_rings(path)
        assert coords(rings[0]) == [(0, 0), (4, 0), (4, 3)]

    def test_load_unparseable(self, tmp_path):
        bad_json = tmp_path / 'bad.json'
        bad_json.write_text('{"schema": ')
        with pytest.raises(ValueError):
            load_rings(bad_json)
        bad_yaml = tmp_path / 'bad.yml'
        bad_yaml.write_text('- [1, 2\n')
        with pytest.raises(ValueError):
            load_rings(bad_yaml)
