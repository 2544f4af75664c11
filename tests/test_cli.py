import json

import ezdxf
import pytest

from ringcad.__main__ import main
from ringcad.config import RINGCAD_LOD_CONFIG
from ringcad.geom import generate_circle, generate_rectangle
from ringcad.io.points import load_rings, save_rings


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.delenv(RINGCAD_LOD_CONFIG, raising=False)
    monkeypatch.setenv('HOME', str(tmp_path))


@pytest.fixture
def shapes(tmp_path):
    path = tmp_path / 'shapes.json'
    save_rings([generate_rectangle(0, 0, 10, 5), generate_circle((0, 0), 5, 100)], path)
    return path


def test_info(shapes, capsys):
    assert main(['info', str(shapes)]) == 0
    out = capsys.readouterr().out
    assert '2 ring(s)' in out
    assert 'ring 0: 4 vertices' in out
    assert 'area:      50' in out
    assert 'perimeter: 30' in out
    assert 'winding:   ccw' in out


def test_info_reports_warnings(tmp_path, capsys):
    path = tmp_path / 'cw.json'
    path.write_text(json.dumps([[0, 0], [0, 4], [4, 4], [4, 0]]))
    assert main(['info', str(path)]) == 0
    assert 'warning: ring winds clockwise' in capsys.readouterr().out


def test_lod(capsys):
    assert main(['lod', '0.2']) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc['lod']['segments'] == 4
    assert doc['lod']['smoothing_iterations'] == 3
    assert doc['hints']['anti_alias'] is True


def test_lod_with_config(tmp_path, capsys):
    cfg = tmp_path / 'lod.yaml'
    cfg.write_text('minSegments: 10\nmaxSegments: 20\n')
    assert main(['lod', '5', '--config', str(cfg)]) == 0
    assert json.loads(capsys.readouterr().out)['lod']['segments'] == 20


def test_simplify_stdout(shapes, capsys):
    assert main(['simplify', str(shapes), '--zoom', '0.2']) == 0
    doc = json.loads(capsys.readouterr().out)
    sizes = [len(r['points']) for r in doc['rings']]
    assert sizes == [4, 4]


def test_simplify_output(shapes, tmp_path):
    out = tmp_path / 'small.json'
    assert main(['simplify', str(shapes), '-z', '3', '-o', str(out)]) == 0
    assert [r.size for r in load_rings(out)] == [4, 100]


def test_export_dxf(shapes, tmp_path):
    out = tmp_path / 'shapes.dxf'
    assert main(['export-dxf', str(shapes), str(out), '--layer', 'CUT']) == 0
    doc = ezdxf.readfile(out)
    lines = list(doc.modelspace().query('LWPOLYLINE'))
    assert len(lines) == 2
    assert {pl.dxf.layer for pl in lines} == {'CUT'}


def test_export_dxf_failure(shapes, tmp_path, capsys):
    out = tmp_path / 'missing' / 'shapes.dxf'
    assert main(['export-dxf', str(shapes), str(out)]) == 1
    assert 'could not write' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(['info', str(tmp_path / 'nope.json')]) == 1
    assert 'Error:' in capsys.readouterr().err


def test_bad_document(tmp_path, capsys):
    path = tmp_path / 'bad.json'
    path.write_text('{"schema": "other", "rings": []}')
    assert main(['info', str(path)]) == 1
    assert 'unsupported rings schema' in capsys.readouterr().err
