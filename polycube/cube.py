# polycube/cube.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from polycube.cells import Cell, Grid
from polycube.placements import Placement

Entry = Tuple[str, Placement]


class CubeState:
    """
    Persistent cell -> piece-name assignment.

    `place` returns a new state and leaves this one untouched, so sibling
    search branches can hold their own states without undo bookkeeping.
    """

    __slots__ = ("grid", "mask", "entries")

    def __init__(self, grid: Grid, mask: int = 0, entries: Tuple[Entry, ...] = ()):
        self.grid = grid
        self.mask = mask
        self.entries = entries

    @classmethod
    def empty(cls, size: int) -> "CubeState":
        return cls(Grid(size))

    @property
    def size(self) -> int:
        return self.grid.size

    def is_filled(self, cell: Cell) -> bool:
        return (self.mask >> cell) & 1 == 1

    def place(self, name: str, placement: Placement) -> "CubeState":
        # caller has already checked for conflicts
        return CubeState(self.grid, self.mask | placement.mask, self.entries + ((name, placement),))

    def owner(self, cell: Cell) -> Optional[str]:
        if not self.is_filled(cell):
            return None
        for name, pl in reversed(self.entries):
            if cell in pl:
                return name
        return None

    def filled_count(self) -> int:
        return bin(self.mask).count("1")

    def is_complete(self) -> bool:
        return self.filled_count() == self.grid.volume

    def is_consistent(self) -> bool:
        """No cell is attributed to two entries."""
        return self.filled_count() == sum(len(pl) for _, pl in self.entries)

    def names(self) -> List[str]:
        return [name for name, _ in self.entries]

    def as_mapping(self) -> Dict[Cell, str]:
        out: Dict[Cell, str] = {}
        for name, pl in self.entries:
            for c in pl.cells:
                out[c] = name
        return out

    def signature(self) -> Tuple[Tuple[str, Tuple[Cell, ...]], ...]:
        """Order-agnostic identity of the arrangement."""
        return tuple(sorted((name, tuple(sorted(pl.cellset))) for name, pl in self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"CubeState(size={self.grid.size}, pieces={len(self.entries)}, filled={self.filled_count()})"
