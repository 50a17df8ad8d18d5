import json

from polycube.cube import CubeState
from polycube.placements import Placement
from polycube.render import solution_record, string_of_cube, write_solution

def test_empty_cube_renders_dots():
    assert string_of_cube(CubeState.empty(2)) == "\n   ..   ..\n   ..   ..\n"

def test_layers_top_row_first():
    # P on the y=0 face, Q on the y=1 face
    cube = CubeState.empty(2).place("P", Placement([0, 1, 4, 5])).place("Q", Placement([2, 3, 6, 7]))
    assert string_of_cube(cube) == "\n   QQ   QQ\n   PP   PP\n"

def test_slices_side_by_side():
    cube = CubeState.empty(2).place("P", Placement([0, 1, 2, 3]))
    assert string_of_cube(cube) == "\n   PP   ..\n   PP   ..\n"

def test_solution_record():
    cube = CubeState.empty(2).place("P", Placement([0, 7]))
    rec = solution_record(cube, "fixture", 1, timestamp=0.0)
    assert rec["size"] == 2
    assert rec["filled"] == 2
    assert rec["pieces"] == [{"name": "P", "cells": [[0, 0, 0], [1, 1, 1]]}]

def test_write_solution(tmp_path):
    cube = CubeState.empty(2).place("P", Placement([0, 1, 2, 3])).place("Q", Placement([4, 5, 6, 7]))
    txt, js = write_solution(cube, str(tmp_path / "out"), "fixture", 3)
    assert txt.endswith("fixture.result3.txt")
    with open(txt, encoding="utf-8") as f:
        assert f.read() == "   PP   QQ\n   PP   QQ\n"
    with open(js, encoding="utf-8") as f:
        data = json.load(f)
    assert data["index"] == 3
    assert [p["name"] for p in data["pieces"]] == ["P", "Q"]
