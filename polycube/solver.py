# polycube/solver.py — polycube cube-tiling driver
# Runs the Bedlam (4x4x4, 13 distinct pieces) or Wood25 (5x5x5, one repeated
# shape) search, prints each solution as found, "stop" on exhaustion, and
# optionally writes result files and a JSON-lines progress stream.

from __future__ import annotations
import argparse
import os
import sys
import time
from typing import List, Optional

from polycube.catalog import WOOD25_PIECE_LIMIT, bedlam_engine, bedlam_fill_order, wood25_engine, wood25_fill_order
from polycube.cube import CubeState
from polycube.progress import make_emit_progress, progress_fields
from polycube.render import string_of_cube, write_solution
from polycube.search import SearchEngine, SearchStats, Visit

# ---------- defaults (env overridable) ----------
DEFAULT_VARIANT = "bedlam"
DEFAULT_MAX_RESULTS = 0  # 0 = enumerate everything
DEFAULT_RESULTS_DIR = os.environ.get("POLYCUBE_RESULTS_DIR") or None
DEFAULT_PROGRESS_STREAM = os.environ.get("POLYCUBE_PROGRESS_STREAM") or None

VARIANTS = ("bedlam", "wood25")


# ---------- engine builder ----------
def fill_order_for(variant: str, reverse: bool = False) -> List[int]:
    order = bedlam_fill_order() if variant == "bedlam" else wood25_fill_order()
    if reverse:
        order = order[::-1]
    return order


def build_engine(variant: str,
                 reverse: bool = False,
                 piece_limit: Optional[int] = WOOD25_PIECE_LIMIT,
                 on_progress=None) -> SearchEngine:
    if variant not in VARIANTS:
        raise ValueError(f"unknown variant {variant!r} (expected one of {', '.join(VARIANTS)})")
    order = fill_order_for(variant, reverse)
    if variant == "bedlam":
        return bedlam_engine(order, on_progress=on_progress)
    limit = piece_limit if piece_limit else None
    return wood25_engine(order, limit=limit, on_progress=on_progress)


# ---------- CLI ----------
def build_argparser():
    p = argparse.ArgumentParser(
        description=(
            "Polycube cube-tiling solver — enumerate exact covers of a cube by a piece catalog.\n\n"
            "Examples:\n"
            "  python run_solver.py bedlam\n"
            "  python run_solver.py bedlam --max-results 3 --results-dir results\n"
            "  python run_solver.py wood25 --piece-limit 0\n"
            "  python run_solver.py wood25 --time-limit 600 --progress-stream logs/progress.jsonl\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    p.add_argument("variant", nargs="?", choices=VARIANTS, default=DEFAULT_VARIANT,
                   help="Puzzle to solve (default: bedlam).")

    p.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS, metavar="N",
                   help="Stop after N solutions. Default: 0 (enumerate all).")

    p.add_argument("--time-limit", type=float, default=None, metavar="SECONDS",
                   help="Stop at the first solution found after SECONDS have elapsed.")

    p.add_argument("--piece-limit", type=int, default=WOOD25_PIECE_LIMIT, metavar="N",
                   help=f"wood25 only: emit once N copies are placed (default: {WOOD25_PIECE_LIMIT}; 0 = fill every cell).")

    p.add_argument("--reverse-order", action="store_true",
                   help="Fill cells in the reverse of the default order (same solutions, different order).")

    p.add_argument("--results-dir", default=DEFAULT_RESULTS_DIR, metavar="DIR",
                   help="Write <variant>.result<k>.txt/.json per solution into DIR.")

    p.add_argument("--progress-stream", default=DEFAULT_PROGRESS_STREAM, metavar="PATH",
                   help="Append JSON-lines progress events to PATH.")

    p.add_argument("--quiet", action="store_true",
                   help="Do not print solution grids or progress lines.")

    return p


# ---------- driver ----------
def run(args) -> int:
    emit = make_emit_progress(args.progress_stream, echo=not args.quiet)

    def on_progress(stats: SearchStats):
        emit("progress", variant=args.variant, **progress_fields(stats))

    engine = build_engine(args.variant, reverse=args.reverse_order,
                          piece_limit=args.piece_limit, on_progress=on_progress)
    emit("start", variant=args.variant, cells=len(set(engine.fill_order)))

    max_results = max(0, int(args.max_results))
    deadline = (time.monotonic() + args.time_limit) if args.time_limit else None
    found = 0
    completed = False

    def on_solution(cube: CubeState):
        nonlocal found
        found += 1
        if not args.quiet:
            print(string_of_cube(cube), flush=True)
        paths = write_solution(cube, args.results_dir, args.variant, found) if args.results_dir else None
        emit("solution", variant=args.variant, index=found, pieces=len(cube),
             filled=cube.filled_count(), path=(paths[1] if paths else None))
        if max_results and found >= max_results:
            return Visit.STOP
        if deadline is not None and time.monotonic() >= deadline:
            return Visit.STOP
        return Visit.CONTINUE

    def on_complete(stats: SearchStats):
        nonlocal completed
        completed = True
        if not args.quiet:
            print("stop", flush=True)
        emit("complete", variant=args.variant, **progress_fields(stats))

    delivered = engine.visit(on_solution, on_complete)
    if not completed:
        emit("stopped", variant=args.variant, solutions=delivered)
    return 0


def main(argv=None) -> int:
    p = build_argparser()
    args = p.parse_args(argv)
    try:
        return run(args)
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    sys.exit(main())
