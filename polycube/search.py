# polycube/search.py
# Ordered depth-first exact-cover search over precomputed placement tables.
#
# Cells are filled in a caller-supplied order. At each choice point only the
# placements that cover the next unfilled cell are tried, pieces in catalog
# order and each piece's placements in builder order, so solutions come out
# in a fixed, reproducible sequence. Backtracking walks an explicit stack of
# frames (one per placed piece) instead of recursing, which keeps 125-deep
# Wood25 searches off the interpreter stack.

from __future__ import annotations
import enum
import string
import time
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

from polycube.cells import Cell, Grid
from polycube.cube import CubeState
from polycube.placements import Piece, Placement

_NAMES = string.ascii_letters


def name_for(n: int) -> str:
    """Synthetic name of the n-th copy of a repeated shape: a, b, ..., y, z, A, ..."""
    return _NAMES[n] if n < len(_NAMES) else str(n)


class Visit(enum.Enum):
    CONTINUE = "continue"
    STOP = "stop"


# --------------------------
# Piece availability
# --------------------------
class DistinctPieces:
    """Every catalog piece at most once (Bedlam). State: frozenset of used names."""

    def __init__(self, pieces: Iterable[Piece]):
        self.pieces: Tuple[Piece, ...] = tuple(pieces)

    def initial(self) -> FrozenSet[str]:
        return frozenset()

    def exhausted(self, used: FrozenSet[str]) -> bool:
        return False

    def offers(self, used: FrozenSet[str]) -> Iterator[Tuple[str, Piece, FrozenSet[str]]]:
        for p in self.pieces:
            if p.name not in used:
                yield p.name, p, used | {p.name}

    def total(self) -> Optional[int]:
        return len(self.pieces)


class RepeatedShape:
    """
    One shape reused under synthetic names (Wood25). State: placement count.

    `limit` is a count terminal separate from "all cells filled": once `limit`
    copies are down the state is emitted as a solution even if cells remain.
    """

    def __init__(self, piece: Piece, limit: Optional[int] = None):
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self.piece = piece
        self.limit = limit

    def initial(self) -> int:
        return 0

    def exhausted(self, n: int) -> bool:
        return self.limit is not None and n >= self.limit

    def offers(self, n: int) -> Iterator[Tuple[str, Piece, int]]:
        yield name_for(n), self.piece, n + 1

    def total(self) -> Optional[int]:
        return self.limit


# --------------------------
# Search context
# --------------------------
@dataclass
class SearchStats:
    nodes: int = 0             # choice points opened
    attempts: int = 0          # placements applied
    depth: int = 0
    best_depth_ever: int = 0
    low_water: Optional[int] = None
    solutions: int = 0
    t0: float = field(default_factory=time.monotonic)

    def observe(self, depth: int) -> bool:
        """
        Track depth; True when the search has backed out below every earlier
        low point since it first went deeper (the long-run progress signal).
        """
        self.depth = depth
        dropped = False
        if depth < self.best_depth_ever and (self.low_water is None or depth < self.low_water):
            self.low_water = depth
            dropped = True
        if depth > self.best_depth_ever:
            self.best_depth_ever = depth
        return dropped

    def elapsed_seconds(self) -> float:
        return time.monotonic() - self.t0


class _Frame:
    __slots__ = ("cube", "pos", "state", "choices")

    def __init__(self, cube: CubeState, pos: int, state, choices):
        self.cube = cube
        self.pos = pos
        self.state = state
        self.choices = choices  # None marks a solution frame


# --------------------------
# Engine
# --------------------------
class SearchEngine:
    """
    Inputs:
      - size:          grid side
      - availability:  DistinctPieces or RepeatedShape
      - fill_order:    cells in the order they should be filled; must cover
                       the grid, repeats are skipped as already filled
      - on_progress:   called with SearchStats whenever the depth low-water
                       mark drops
      - on_place:      called with every new CubeState right after a placement
    """

    def __init__(self,
                 size: int,
                 availability,
                 fill_order: Iterable[Cell],
                 on_progress: Optional[Callable[[SearchStats], None]] = None,
                 on_place: Optional[Callable[[CubeState], None]] = None):
        self.grid = Grid(size)
        self.availability = availability
        self.fill_order: Tuple[Cell, ...] = self._check_order(self.grid, fill_order)
        self.on_progress = on_progress
        self.on_place = on_place
        self.stats = SearchStats()

    @staticmethod
    def _check_order(grid: Grid, fill_order: Iterable[Cell]) -> Tuple[Cell, ...]:
        order = tuple(int(c) for c in fill_order)
        bad = [c for c in order if not grid.contains(c)]
        if bad:
            raise ValueError(f"fill order has cells outside a {grid.size}^3 grid: {bad[:5]}")
        missing = set(grid.all_cells()).difference(order)
        if missing:
            raise ValueError(f"fill order misses {len(missing)} cell(s), e.g. {sorted(missing)[:5]}")
        return order

    # --------------------------
    # Choice points
    # --------------------------
    def _choices(self, cube: CubeState, cell: Cell, state) -> Iterator[Tuple[str, Placement, object]]:
        occ = cube.mask
        for name, piece, nxt in self.availability.offers(state):
            for pl in piece.covering(cell):
                if occ & pl.mask:
                    continue
                yield name, pl, nxt

    def _open(self, stats: SearchStats, cube: CubeState, pos: int, state) -> _Frame:
        stats.nodes += 1
        if stats.observe(len(cube)) and self.on_progress is not None:
            self.on_progress(stats)

        if self.availability.exhausted(state):
            return _Frame(cube, pos, state, None)
        order = self.fill_order
        n = len(order)
        while pos < n and cube.is_filled(order[pos]):
            pos += 1
        if pos == n:
            return _Frame(cube, pos, state, None)
        return _Frame(cube, pos, state, self._choices(cube, order[pos], state))

    # --------------------------
    # Public API
    # --------------------------
    def solutions(self, stats: Optional[SearchStats] = None) -> Iterator[CubeState]:
        """
        Lazily yield every solution in deterministic order. Each call starts a
        fresh search; stop iterating to abandon the rest of the tree.
        Counters go to `stats` (a fresh SearchStats by default), never shared
        between runs.
        """
        if stats is None:
            stats = SearchStats()
        # last run, for callers that only hold the engine
        self.stats = stats
        frames: List[_Frame] = [self._open(stats, CubeState(self.grid), 0, self.availability.initial())]
        while frames:
            top = frames[-1]
            if top.choices is None:
                frames.pop()
                stats.solutions += 1
                yield top.cube
                continue
            step = next(top.choices, None)
            if step is None:
                frames.pop()
                continue
            name, pl, nxt = step
            cube = top.cube.place(name, pl)
            stats.attempts += 1
            if self.on_place is not None:
                self.on_place(cube)
            frames.append(self._open(stats, cube, top.pos + 1, nxt))

    def visit(self,
              on_solution: Callable[[CubeState], Optional[Visit]],
              on_complete: Optional[Callable[[SearchStats], None]] = None) -> int:
        """
        Push each solution to `on_solution`; returning Visit.STOP ends the
        search early. `on_complete` fires once, only if the space was exhausted.
        Returns the number of solutions delivered.
        """
        delivered = 0
        stats = SearchStats()
        gen = self.solutions(stats)
        try:
            for cube in gen:
                delivered += 1
                if on_solution(cube) is Visit.STOP:
                    return delivered
        finally:
            gen.close()
        if on_complete is not None:
            on_complete(stats)
        return delivered

    def first_solution(self) -> Optional[CubeState]:
        gen = self.solutions()
        try:
            return next(gen, None)
        finally:
            gen.close()


def solve(size: int,
          pieces: Sequence[Piece],
          fill_order: Optional[Iterable[Cell]] = None) -> Iterator[CubeState]:
    """All tilings of a size^3 grid using each piece of `pieces` once."""
    if fill_order is None:
        fill_order = range(size ** 3)
    return SearchEngine(size, DistinctPieces(pieces), fill_order).solutions()


def solve_repeated(size: int,
                   piece: Piece,
                   fill_order: Optional[Iterable[Cell]] = None,
                   limit: Optional[int] = None) -> Iterator[CubeState]:
    """All tilings of a size^3 grid by copies of one piece, optionally capped at `limit` copies."""
    if fill_order is None:
        fill_order = range(size ** 3)
    return SearchEngine(size, RepeatedShape(piece, limit), fill_order).solutions()
