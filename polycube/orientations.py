# polycube/orientations.py
from __future__ import annotations
from typing import Callable, List, Tuple
import itertools

Coord = Tuple[int, int, int]
Transform = Callable[[Coord], Coord]

# --- primitive moves (rotate the whole size^3 grid about its centre) ---

def _identity(m: int) -> Transform:
    return lambda p: (p[0], p[1], p[2])

def _quarter_xy(m: int) -> Transform:
    return lambda p: (p[1], m - p[0], p[2])

def _half_xy(m: int) -> Transform:
    return lambda p: (m - p[0], m - p[1], p[2])

def _quarter_xz(m: int) -> Transform:
    return lambda p: (p[2], p[1], m - p[0])

def _clock(m: int) -> Transform:
    return lambda p: (p[1], p[2], p[0])

def _anti(m: int) -> Transform:
    return lambda p: (p[2], p[0], p[1])


def _compose(*fs: Transform) -> Transform:
    """compose(f1, f2, f3, f4)(p) == f1(f2(f3(f4(p))))"""
    def t(p: Coord) -> Coord:
        for f in reversed(fs):
            p = f(p)
        return p
    return t


# --- 24 proper rotations ---

def generate_orientations(size: int) -> List[Transform]:
    """
    The 24 rotations of a size^3 grid as f1∘f2∘f3∘f4 over
      f1 ∈ {id, quarter_xy}, f2 ∈ {id, half_xy},
      f3 ∈ {id, quarter_xz}, f4 ∈ {id, clock, anti}.
    f1 varies slowest, f4 fastest. No mirrors: every choice is a rotation.
    """
    m = int(size) - 1
    if m < 0:
        raise ValueError(f"grid size must be positive, got {size}")
    f1s = (_identity(m), _quarter_xy(m))
    f2s = (_identity(m), _half_xy(m))
    f3s = (_identity(m), _quarter_xz(m))
    f4s = (_identity(m), _clock(m), _anti(m))
    return [_compose(f1, f2, f3, f4) for f1, f2, f3, f4 in itertools.product(f1s, f2s, f3s, f4s)]


def linear_part(t: Transform) -> Tuple[Coord, Coord, Coord]:
    """Images of the unit axes with the grid-centring translation removed."""
    o = t((0, 0, 0))
    cols = []
    for e in ((1, 0, 0), (0, 1, 0), (0, 0, 1)):
        q = t(e)
        cols.append((q[0] - o[0], q[1] - o[1], q[2] - o[2]))
    return cols[0], cols[1], cols[2]


def determinant(t: Transform) -> int:
    a, b, c = linear_part(t)
    return (a[0] * (b[1] * c[2] - b[2] * c[1])
            - b[0] * (a[1] * c[2] - a[2] * c[1])
            + c[0] * (a[1] * b[2] - a[2] * b[1]))
