# polycube/placements.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from polycube.cells import Cell, CellRangeError, Coord, Grid
from polycube.orientations import generate_orientations

Box = Tuple[int, int, int]
CatalogEntry = Tuple[str, Box, Sequence[Coord]]


class CatalogError(ValueError):
    """Malformed catalog entry (bad box/offset pair, duplicate name, empty shape)."""


class Placement:
    """One concrete instantiation of a piece: the cells it would occupy."""

    __slots__ = ("cells", "cellset", "mask")

    def __init__(self, cells: Iterable[Cell]):
        self.cells: Tuple[Cell, ...] = tuple(cells)
        self.cellset = frozenset(self.cells)
        mask = 0
        for c in self.cells:
            mask |= (1 << c)
        self.mask = mask

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __contains__(self, cell) -> bool:
        return cell in self.cellset

    # order irrelevant: two placements are equal iff they cover the same cells
    def __eq__(self, other) -> bool:
        return isinstance(other, Placement) and other.cellset == self.cellset

    def __hash__(self) -> int:
        return hash(self.cellset)

    def __repr__(self) -> str:
        return f"Placement({sorted(self.cellset)})"


def _shifts(box: Box) -> List[Coord]:
    bx, by, bz = box
    return [(sx, sy, sz) for sx in range(bx) for sy in range(by) for sz in range(bz)]


def build_placements(size: int, box: Box, offsets: Sequence[Coord]) -> List[Placement]:
    """
    All distinct placements of a shape in a size^3 grid.

    Orientation-major, shift-minor. Each offset is shifted by (sx,sy,sz) with
    s in [0,box) per axis, then the orientation rotates the whole grid. The
    first occurrence of each distinct cell set is kept.

    Raises CellRangeError if any coordinate leaves the grid.
    """
    grid = Grid(size)
    shifts = _shifts(box)
    seen = set()
    out: List[Placement] = []
    for f in generate_orientations(size):
        for sx, sy, sz in shifts:
            pl = Placement(grid.make_cell(f((x + sx, y + sy, z + sz))) for (x, y, z) in offsets)
            if pl.cellset in seen:
                continue
            seen.add(pl.cellset)
            out.append(pl)
    return out


@dataclass(frozen=True)
class Piece:
    name: str
    box: Box
    offsets: Tuple[Coord, ...]
    placements: Tuple[Placement, ...]
    _by_cell: Optional[Dict[Cell, Tuple[Placement, ...]]] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self._by_cell is None:
            object.__setattr__(self, "_by_cell", _index_by_cell(self.placements))

    def __len__(self) -> int:
        return len(self.offsets)

    def covering(self, cell: Cell) -> Tuple[Placement, ...]:
        """Placements that contain `cell`, in builder order."""
        return self._by_cell.get(cell, ())


def _index_by_cell(placements: Sequence[Placement]) -> Dict[Cell, Tuple[Placement, ...]]:
    idx: Dict[Cell, List[Placement]] = {}
    for pl in placements:
        for c in pl.cells:
            idx.setdefault(c, []).append(pl)
    return {c: tuple(lst) for c, lst in idx.items()}


def make_piece(size: int, name: str, box: Box, offsets: Sequence[Coord]) -> Piece:
    name = str(name)
    offs = tuple((int(x), int(y), int(z)) for (x, y, z) in offsets)
    if not offs:
        raise CatalogError(f"piece {name!r}: empty offset list")
    if len(set(offs)) != len(offs):
        raise CatalogError(f"piece {name!r}: repeated offset")
    bx, by, bz = (int(v) for v in box)
    if bx <= 0 or by <= 0 or bz <= 0:
        raise CatalogError(f"piece {name!r}: bounding box must be positive, got {tuple(box)}")
    try:
        pls = build_placements(size, (bx, by, bz), offs)
    except CellRangeError as exc:
        raise CatalogError(f"piece {name!r}: box {(bx, by, bz)} does not fit offsets in a {size}^3 grid ({exc})") from exc
    return Piece(name=name, box=(bx, by, bz), offsets=offs,
                 placements=tuple(pls), _by_cell=_index_by_cell(pls))


def make_catalog(size: int, entries: Iterable[CatalogEntry]) -> List[Piece]:
    """Build every piece, keeping catalog order."""
    pieces: List[Piece] = []
    names = set()
    for name, box, offsets in entries:
        if name in names:
            raise CatalogError(f"duplicate piece name {name!r}")
        names.add(name)
        pieces.append(make_piece(size, name, box, offsets))
    return pieces
