# run_solver.py (at repo root)
#!/usr/bin/env python3
from pathlib import Path
import sys, runpy

repo = Path(__file__).resolve().parent
solver = repo / "polycube" / "solver.py"
if not solver.exists():
    sys.stderr.write(f"Solver not found: {solver}\n")
    sys.exit(2)

# Make the package importable when launched from anywhere
if str(repo) not in sys.path:
    sys.path.insert(0, str(repo))

# Execute polycube.solver as __main__ with the caller's argv
sys.argv = [str(solver)] + sys.argv[1:]
runpy.run_module("polycube.solver", run_name="__main__", alter_sys=True)
