import itertools

from polycube.orientations import determinant, generate_orientations, linear_part

def test_exactly_24():
    assert len(generate_orientations(4)) == 24
    assert len(generate_orientations(5)) == 24

def test_first_is_identity():
    t = generate_orientations(4)[0]
    assert all(t(p) == p for p in itertools.product(range(4), repeat=3))

def test_all_proper_rotations():
    # no mirrors
    assert all(determinant(t) == 1 for t in generate_orientations(4))

def test_pairwise_distinct():
    mats = {linear_part(t) for t in generate_orientations(4)}
    assert len(mats) == 24

def test_each_maps_grid_onto_itself():
    for n in (2, 4, 5):
        pts = list(itertools.product(range(n), repeat=3))
        for t in generate_orientations(n):
            img = {t(p) for p in pts}
            assert img == set(pts)
