from ringcad.geom import generate_rectangle
from ringcad.geometry_checks import check_ring, zero_length_edges
from ringcad.ring import Ring


def test_clean_ring():
    result = check_ring(generate_rectangle(0, 0, 4, 4))
    assert result
    assert result.warnings == []


def test_broken_links():
    ring = generate_rectangle(0, 0, 4, 4)
    ring.head.next = ring.head
    result = check_ring(ring)
    assert not result
    assert result.warnings == ['ring links are inconsistent']


def test_too_few_vertices():
    result = check_ring(Ring([(0, 0), (1, 1)]))
    assert result.ok
    assert result.warnings[0].startswith('2 vertices')
    assert check_ring(Ring()).ok


def test_clockwise():
    ring = generate_rectangle(0, 0, 4, 4)
    ring.reverse()
    assert check_ring(ring).warnings == ['ring winds clockwise']


def test_flat_ring():
    ring = Ring([(0, 0), (5, 0), (10, 0)])
    assert 'ring encloses no area' in check_ring(ring).warnings


def test_zero_length_edges():
    ring = Ring([(0, 0), (0, 0), (4, 0), (4, 4), (0, 0)])
    assert zero_length_edges(ring) == [0, 4]
    result = check_ring(ring)
    assert result.ok
    assert 'zero-length edges at indices: [0, 4]' in result.warnings
    assert zero_length_edges(Ring([(1, 1)])) == []
