# polycube/render.py
from __future__ import annotations
import json
import os
import time
from typing import Dict, Optional, Tuple

from polycube.cube import CubeState

EMPTY = "."
INDENT = "   "


def string_of_cube(cube: CubeState) -> str:
    """
    One line per y (top row first). Each line holds the z-slices side by side,
    z ascending, each slice printed as its x-row after a fixed indent:

        y=3:   z0-row   z1-row   z2-row   z3-row
        ...
        y=0:   ...
    """
    n = cube.size
    grid = cube.grid
    owner = cube.as_mapping()
    lines = []
    for y in range(n - 1, -1, -1):
        parts = []
        for z in range(n):
            row = "".join(owner.get(grid.make_cell((x, y, z)), EMPTY) for x in range(n))
            parts.append(INDENT + row)
        lines.append("".join(parts))
    return "\n" + "\n".join(lines) + "\n"


def solution_record(cube: CubeState, variant: str, index: int, timestamp: Optional[float] = None) -> Dict:
    grid = cube.grid
    return {
        "schema": "polycube_solution/1.0",
        "variant": variant,
        "size": cube.size,
        "index": index,
        "filled": cube.filled_count(),
        "pieces": [
            {"name": name, "cells": [list(grid.cell_xyz(c)) for c in pl.cells]}
            for name, pl in cube.entries
        ],
        "timestamp": time.time() if timestamp is None else timestamp,
    }


# ---------- atomic writes ----------
def _atomic_write(path: str, data: str):
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(data)
    os.replace(tmp, path)


def write_solution(cube: CubeState, results_dir: str, variant: str, index: int) -> Tuple[str, str]:
    """Write <variant>.result<index>.txt and .json; returns both paths."""
    os.makedirs(results_dir, exist_ok=True)
    base = os.path.join(results_dir, f"{variant}.result{index}")
    txt_path = base + ".txt"
    json_path = base + ".json"
    _atomic_write(txt_path, string_of_cube(cube).lstrip("\n"))
    _atomic_write(json_path, json.dumps(solution_record(cube, variant, index), ensure_ascii=False, indent=2))
    return txt_path, json_path
