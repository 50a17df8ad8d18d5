# polycube/catalog.py
# Static piece data for the two puzzles and their cell-fill orders.
from __future__ import annotations
from typing import List, Optional, Tuple

from polycube.cells import Cell
from polycube.placements import CatalogEntry, Piece, make_catalog, make_piece
from polycube.search import DistinctPieces, RepeatedShape, SearchEngine

BEDLAM_SIZE = 4
WOOD25_SIZE = 5

# Single-letter names keep the printed cube compact.
# Box = number of legal shifts per axis inside the 4x4x4 grid.
BEDLAM_PIECES: Tuple[CatalogEntry, ...] = (
    # red
    ("A", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (0, 1, 0), (0, 0, 1))),  # base-girder
    ("B", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (1, 1, 0), (2, 1, 0), (2, 1, 1))),  # spiral-staircase
    ("C", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (1, 1, 0), (2, 1, 0), (1, 1, 1))),  # fork
    ("D", (2, 2, 4), ((1, 0, 0), (1, 1, 0), (1, 2, 0), (0, 1, 0), (2, 1, 0))),  # flat-cross
    # blue
    ("e", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (1, 1, 0), (1, 1, 1))),  # modern-art
    ("f", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (1, 1, 0), (0, 0, 1))),  # bent-f-piece
    ("g", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (1, 1, 0), (1, 1, 1), (2, 1, 1))),  # s-piece
    ("h", (2, 2, 4), ((1, 0, 0), (0, 1, 0), (1, 1, 0), (2, 1, 0), (0, 2, 0))),  # flat-tree
    # yellow
    ("v", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (2, 0, 1), (2, 1, 1))),  # L-sign-post
    ("w", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (2, 1, 0), (0, 0, 1))),  # hug
    ("x", (2, 3, 3), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (1, 1, 0), (1, 0, 1))),  # middle-girder
    ("y", (2, 2, 4), ((0, 0, 0), (1, 0, 0), (1, 1, 0), (2, 1, 0), (2, 2, 0))),  # simple-stairs
    ("z", (3, 3, 3), ((0, 0, 0), (1, 0, 0), (1, 1, 0), (1, 1, 1))),             # small-one
)

# Wood25: 25 copies of one flat 5-cell shape.
WOOD25_SHAPE: CatalogEntry = ("wood", (2, 4, 5), ((0, 0, 0), (1, 0, 0), (2, 0, 0), (2, 1, 0), (3, 1, 0)))

# Default Wood25 count terminal: emit after 24 copies, the 25th being
# whatever five cells remain.
WOOD25_PIECE_LIMIT = 24


def bedlam_pieces() -> List[Piece]:
    return make_catalog(BEDLAM_SIZE, BEDLAM_PIECES)


def wood25_piece() -> Piece:
    name, box, offsets = WOOD25_SHAPE
    return make_piece(WOOD25_SIZE, name, box, offsets)


def bedlam_fill_order() -> List[Cell]:
    return list(range(BEDLAM_SIZE ** 3))


def wood25_fill_order() -> List[Cell]:
    """
    Bottom face, x=0 face, y=0 face, then everything. Faces overlap, repeats
    are skipped by the search as already filled.
    """
    face_z0 = list(range(25))
    face_x0 = [i * 5 for i in range(25)]
    face_y0 = [z * 25 + x for z in range(5) for x in range(5)]
    return face_z0 + face_x0 + face_y0 + list(range(WOOD25_SIZE ** 3))


def bedlam_engine(fill_order=None, **kw) -> SearchEngine:
    order = bedlam_fill_order() if fill_order is None else fill_order
    return SearchEngine(BEDLAM_SIZE, DistinctPieces(bedlam_pieces()), order, **kw)


def wood25_engine(fill_order=None, limit: Optional[int] = WOOD25_PIECE_LIMIT, **kw) -> SearchEngine:
    order = wood25_fill_order() if fill_order is None else fill_order
    return SearchEngine(WOOD25_SIZE, RepeatedShape(wood25_piece(), limit), order, **kw)
