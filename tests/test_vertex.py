import math

import pytest

from ringcad.vertex import (
    DEFAULT_VERTEX_COLOR,
    Point2D,
    Vertex,
    VertexMeta,
    VertexRole,
    as_xy,
)


class Record:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def test_new_vertex_is_detached_without_metadata():
    v = Vertex(1, 2)
    assert v.x == 1.0 and v.y == 2.0
    assert v.detached
    assert v.meta is None


def test_distance_to_accepts_point_likes():
    v = Vertex(0, 0)
    assert v.distance_to(Vertex(3, 4)) == 5.0
    assert v.distance_to((3, 4)) == 5.0
    assert v.distance_to({'x': 3, 'y': 4}) == 5.0
    assert v.distance_to(Record(3, 4)) == 5.0
    assert v.distance_to(Point2D(-3, -4)) == 5.0


def test_set_position_and_to_point():
    v = Vertex(1, 1)
    v.set_position(2.5, -1)
    assert v.to_point() == Point2D(2.5, -1.0)
    assert v.to_point() == (2.5, -1.0)


def test_ensure_meta_creates_once():
    v = Vertex(0, 0)
    meta = v.ensure_meta(role=VertexRole.CONTROL)
    assert meta.role is VertexRole.CONTROL
    assert meta.color == DEFAULT_VERTEX_COLOR
    assert not meta.selected
    assert v.ensure_meta(role=VertexRole.ANCHOR) is meta
    assert meta.role is VertexRole.CONTROL


def test_meta_copy_refreshes_id():
    meta = VertexMeta(selected=True, color='#ff0000')
    dup = meta.copy()
    assert dup.id != meta.id
    assert dup.selected and dup.color == '#ff0000'
    assert meta.copy(fresh_id=False).id == meta.id


def test_as_xy_rejects_non_points():
    with pytest.raises(ValueError):
        as_xy((1,))
    with pytest.raises(ValueError):
        as_xy({'x': 1})
    with pytest.raises(ValueError):
        as_xy(42)


def test_role_values():
    assert [r.value for r in VertexRole] == ['vertex', 'control', 'anchor']
