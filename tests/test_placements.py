import pytest

from polycube.cells import CellRangeError
from polycube.placements import CatalogError, Piece, Placement, build_placements, make_catalog, make_piece

SLAB = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)]

def test_placement_equality_ignores_order():
    assert Placement([3, 1, 2]) == Placement([1, 2, 3])
    assert len({Placement([3, 1, 2]), Placement([2, 3, 1])}) == 1
    assert Placement([0, 2]).mask == 0b101

def test_slab_in_2x2x2_collapses_to_six():
    pls = build_placements(2, (1, 1, 2), SLAB)
    # 24 orientations x 2 shifts = 48 candidates
    assert len(pls) == 6
    assert {frozenset(p.cellset) for p in pls} == {
        frozenset({0, 1, 2, 3}), frozenset({4, 5, 6, 7}),
        frozenset({0, 1, 4, 5}), frozenset({2, 3, 6, 7}),
        frozenset({0, 2, 4, 6}), frozenset({1, 3, 5, 7}),
    }

def test_first_occurrence_kept_in_builder_order():
    pls = build_placements(2, (1, 1, 2), SLAB)
    # identity orientation, shift z=0 then z=1
    assert pls[0].cells == (0, 1, 2, 3)
    assert pls[1].cells == (4, 5, 6, 7)

def test_sizes_match_offsets():
    piece = make_piece(4, "A", (2, 3, 3), [(0, 0, 0), (1, 0, 0), (2, 0, 0), (0, 1, 0), (0, 0, 1)])
    assert piece.placements
    assert all(len(p) == len(piece.offsets) == 5 for p in piece.placements)
    assert len(piece.placements) <= 24 * 2 * 3 * 3

def test_symmetric_flat_cross():
    # plus pentomino: 3 plane normals x 4 layers x 4 centres
    cross = make_piece(4, "D", (2, 2, 4), [(1, 0, 0), (1, 1, 0), (1, 2, 0), (0, 1, 0), (2, 1, 0)])
    assert len(cross.placements) == 48
    assert len(cross.placements) < 24 * 2 * 2 * 4

def test_screw_tetracube_has_twofold_symmetry():
    z = make_piece(4, "z", (3, 3, 3), [(0, 0, 0), (1, 0, 0), (1, 1, 0), (1, 1, 1)])
    assert len(z.placements) == 12 * 27

def test_covering_is_filtered_in_order():
    piece = make_piece(2, "P", (1, 1, 2), SLAB)
    cov = piece.covering(0)
    assert [p.cellset for p in cov] == [p.cellset for p in piece.placements if 0 in p]
    assert len(cov) == 3
    assert piece.covering(99) == ()

def test_piece_built_directly_indexes_its_placements():
    pls = tuple(build_placements(2, (1, 1, 2), SLAB))
    piece = Piece(name="P", box=(1, 1, 2), offsets=tuple(SLAB), placements=pls)
    assert len(piece.covering(0)) == 3
    assert piece == make_piece(2, "P", (1, 1, 2), SLAB)

def test_malformed_box_is_fatal():
    with pytest.raises(CellRangeError):
        build_placements(4, (3, 1, 1), [(0, 0, 0), (1, 0, 0), (2, 0, 0)])
    with pytest.raises(CatalogError) as ei:
        make_piece(4, "bad", (3, 1, 1), [(0, 0, 0), (1, 0, 0), (2, 0, 0)])
    assert "bad" in str(ei.value)
    assert isinstance(ei.value.__cause__, CellRangeError)

def test_catalog_rejects_bad_entries():
    with pytest.raises(CatalogError):
        make_catalog(2, [("P", (1, 1, 2), SLAB), ("P", (1, 1, 2), SLAB)])
    with pytest.raises(CatalogError):
        make_piece(2, "E", (1, 1, 1), [])
    with pytest.raises(CatalogError):
        make_piece(2, "Z", (0, 1, 1), SLAB)

def test_catalog_keeps_order():
    pieces = make_catalog(2, [("Q", (1, 1, 2), SLAB), ("P", (1, 1, 2), SLAB)])
    assert [p.name for p in pieces] == ["Q", "P"]
