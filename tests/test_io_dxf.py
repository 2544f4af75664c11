import ezdxf
import pytest

from ringcad.geom import generate_circle, generate_rectangle
from ringcad.io.dxf import DEFAULT_LAYER, rings_to_dxf, write_dxf
from ringcad.ring import Ring


def polylines(doc):
    return list(doc.modelspace().query('LWPOLYLINE'))


def test_rings_to_dxf():
    doc = rings_to_dxf([generate_rectangle(0, 0, 10, 5), generate_circle((0, 0), 3, 12)])
    lines = polylines(doc)
    assert len(lines) == 2
    assert all(pl.closed for pl in lines)
    assert all(pl.dxf.layer == DEFAULT_LAYER for pl in lines)
    pts = [tuple(p) for p in lines[0].get_points('xy')]
    assert pts == [(0, 0), (10, 0), (10, 5), (0, 5)]
    assert len(lines[1]) == 12


def test_metric_header():
    doc = rings_to_dxf([])
    assert doc.header['$INSUNITS'] == 4
    assert doc.header['$MEASUREMENT'] == 1


def test_degenerate_rings_skipped():
    doc = rings_to_dxf([Ring(), Ring([(1, 1)]), Ring([(0, 0), (1, 1)])])
    assert len(polylines(doc)) == 1


def test_custom_layer():
    doc = rings_to_dxf([generate_rectangle(0, 0, 1, 1)], layer='OUTLINE')
    assert 'OUTLINE' in doc.layers
    assert polylines(doc)[0].dxf.layer == 'OUTLINE'


def test_write_dxf(tmp_path):
    out = tmp_path / 'shapes'
    assert write_dxf([generate_rectangle(0, 0, 2, 2)], out)
    path = tmp_path / 'shapes.dxf'
    assert path.exists()
    doc = ezdxf.readfile(path)
    lines = polylines(doc)
    assert len(lines) == 1
    assert [tuple(p) for p in lines[0].get_points('xy')] == pytest.approx(
        [(0, 0), (2, 0), (2, 2), (0, 2)])


def test_write_dxf_bad_path(tmp_path):
    assert not write_dxf([generate_rectangle(0, 0, 2, 2)], tmp_path / 'missing' / 'x.dxf')
