# polycube/cells.py
from __future__ import annotations
from typing import Iterator, Tuple

Coord = Tuple[int, int, int]
Cell = int


class CellRangeError(ValueError):
    """A coordinate fell outside the grid. Always a catalog/data bug."""


class Grid:
    """
    Dense cell indexing over a cube of side `size`:

        index = x + size*y + size*size*z

    e.g. for size 4:

        12 . . 15  ...  60 . . 63
         .     .
         0 1 2 3   ...  48 . . 51
    """

    __slots__ = ("size", "volume")

    def __init__(self, size: int):
        size = int(size)
        if size <= 0:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        self.volume = size * size * size

    def __repr__(self) -> str:
        return f"Grid({self.size})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Grid) and other.size == self.size

    def __hash__(self) -> int:
        return hash(("Grid", self.size))

    def make_cell(self, p: Coord) -> Cell:
        n = self.size
        x, y, z = p
        for axis, v in (("x", x), ("y", y), ("z", z)):
            if v < 0 or v >= n:
                raise CellRangeError(f"make_cell: {axis}={v} outside [0,{n}) in {tuple(p)}")
        return x + n * y + n * n * z

    def cell_xyz(self, cell: Cell) -> Coord:
        n = self.size
        if cell < 0 or cell >= self.volume:
            raise CellRangeError(f"cell_xyz: {cell} outside [0,{self.volume})")
        return (cell % n, (cell // n) % n, cell // (n * n))

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell < self.volume

    def all_cells(self) -> Iterator[Cell]:
        return iter(range(self.volume))


def make_cell(size: int, p: Coord) -> Cell:
    return Grid(size).make_cell(p)


def cell_xyz(size: int, cell: Cell) -> Coord:
    return Grid(size).cell_xyz(cell)
