#!/usr/bin/env python3
"""Pipeline CLI

Reconstruct queues from (height, count) pairs, one at a time or in bulk:
- a baseline solver (solve_module.py)
- a validator (validate_solve_output.py)
- named example scenarios (scenario_registry.py)
- a CSV batch adapter with selectable output formats (batch/)

Examples
--------

# List built-in scenarios and output formats
python pipeline_cli.py list-scenarios

# Print the reconstructed demo queue
python pipeline_cli.py demo

# Solve a single input
python pipeline_cli.py solve --people "[[7,0],[4,4],[7,1],[5,0],[6,1],[5,2]]"

# Check a solver against a scenario
python pipeline_cli.py validate-solver --solver solve_module.py --scenario canonical

# Solve a CSV of puzzles (columns: id, people)
python pipeline_cli.py build-submission \
  --puzzles puzzles.csv \
  --output answers.csv \
  --format queue-pairs

"""

from __future__ import annotations

import argparse
import csv
import importlib.util
import json
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from batch.format_registry import list_formats
from batch.universal_adapter import build_submission, parse_people
from scenario_registry import Scenario, get_scenario, list_scenarios
from solve_module import reconstruct_queue, solve


ROOT = Path(__file__).resolve().parent
PYTHON = sys.executable

BASELINE_SOLVER = ROOT / "solve_module.py"
VALIDATOR = ROOT / "validate_solve_output.py"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_solve_fn(solver_path: Path) -> Callable[[Sequence[Sequence[int]]], Any]:
    """Dynamically import `solve` from an arbitrary solve_module.py."""
    if not solver_path.exists():
        raise FileNotFoundError(solver_path)

    module_name = f"solve_module_dyn_{abs(hash(str(solver_path)))}"
    spec = importlib.util.spec_from_file_location(module_name, solver_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from {solver_path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]

    fn = getattr(module, "solve", None)
    if fn is None or not callable(fn):
        raise AttributeError(f"No callable solve(people) in {solver_path}")

    return fn


def _resolve_people(args: argparse.Namespace) -> List[List[int]]:
    if getattr(args, "people", None) is not None:
        return parse_people(args.people)
    name = getattr(args, "scenario", None) or "canonical"
    scenario = _require_scenario(name)
    return scenario.people_list()


def _require_scenario(name: str) -> Scenario:
    scenario = get_scenario(name)
    if scenario is None:
        raise SystemExit(
            f"Unknown scenario '{name}'. Run `python pipeline_cli.py list-scenarios`."
        )
    return scenario


def _validate_solver(solver_path: Path, people: Sequence[Sequence[int]]) -> None:
    print(f"[validate] {solver_path.name} n={len(people)} ...")
    subprocess.check_call(
        [
            PYTHON,
            str(VALIDATOR),
            "--solver",
            str(solver_path),
            "--people",
            json.dumps([list(p) for p in people]),
        ]
    )


def _build_submission(
    *,
    puzzles_csv: Path,
    out_csv: Path,
    fmt: str,
    solver_path: Path,
    people_col_override: Optional[str] = None,
    max_rows: Optional[int] = None,
    on_error: str = "raise",
    progress: bool = False,
) -> int:
    solve_fn = _load_solve_fn(solver_path)

    print(f"[submit] Building submission for format={fmt}")
    print(f"         puzzles={puzzles_csv}")
    print(f"         output={out_csv}")

    out_csv.parent.mkdir(parents=True, exist_ok=True)

    n = build_submission(
        puzzles_csv=str(puzzles_csv),
        output_csv=str(out_csv),
        fmt=fmt,
        solve_fn=solve_fn,
        people_col=people_col_override,
        max_rows=max_rows,
        on_error=on_error,
        progress=progress,
    )
    print(f"[submit] wrote {n} rows")
    return n


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def cmd_list_scenarios(_: argparse.Namespace) -> None:
    print("Available scenarios:")
    for s in list_scenarios():
        print(f"- {s.key:16s}  n={len(s.people):<3d} {s.description}")
    print("Output formats: " + ", ".join(list_formats()))


def cmd_demo(args: argparse.Namespace) -> None:
    scenario = _require_scenario(args.scenario)
    people = scenario.people_list()
    print(reconstruct_queue(people))


def cmd_solve(args: argparse.Namespace) -> None:
    try:
        queue = solve(parse_people(args.people))
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        raise SystemExit(2)
    print(json.dumps({"queue": queue}))


def cmd_validate_solver(args: argparse.Namespace) -> None:
    _validate_solver(Path(args.solver), _resolve_people(args))


def cmd_build_submission(args: argparse.Namespace) -> None:
    _build_submission(
        puzzles_csv=Path(args.puzzles),
        out_csv=Path(args.output),
        fmt=args.format,
        solver_path=Path(args.solver),
        people_col_override=args.people_col,
        max_rows=args.max_rows,
        on_error=args.on_error,
        progress=args.progress,
    )


def cmd_selftest(_: argparse.Namespace) -> None:
    """Offline smoke tests over every built-in scenario."""
    tmp = ROOT / "_selftest"
    shutil.rmtree(tmp, ignore_errors=True)
    tmp.mkdir(parents=True, exist_ok=True)

    puzzles_csv = tmp / "puzzles.csv"
    with puzzles_csv.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=["id", "people"])
        w.writeheader()
        for s in list_scenarios():
            print(f"\n[selftest] scenario={s.key}")
            _validate_solver(BASELINE_SOLVER, s.people_list())

            expected = s.expected_list()
            if expected is not None:
                got = solve(s.people_list())
                if got != expected:
                    raise SystemExit(f"[selftest] {s.key}: expected {expected}, got {got}")

            w.writerow({"id": s.key, "people": json.dumps(s.people_list())})

    for fmt in list_formats():
        out_csv = tmp / f"answers_{fmt}.csv"
        _build_submission(
            puzzles_csv=puzzles_csv,
            out_csv=out_csv,
            fmt=fmt,
            solver_path=BASELINE_SOLVER,
        )
        print(f"[selftest] wrote {out_csv}")

    print("\n[selftest] All OK")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Queue reconstruction pipeline CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("list-scenarios", help="List built-in scenarios and output formats")
    sp.set_defaults(func=cmd_list_scenarios)

    sp = sub.add_parser("demo", help="Reconstruct a built-in scenario and print the queue")
    sp.add_argument("--scenario", default="demo", help="Scenario name or alias")
    sp.set_defaults(func=cmd_demo)

    sp = sub.add_parser("solve", help="Reconstruct a single queue given as JSON")
    sp.add_argument("--people", required=True, help="JSON list of [height, count] pairs")
    sp.set_defaults(func=cmd_solve)

    sp = sub.add_parser("validate-solver", help="Validate a solver with validate_solve_output.py")
    sp.add_argument("--solver", default=str(BASELINE_SOLVER), help="Path to solve_module.py")
    g = sp.add_mutually_exclusive_group()
    g.add_argument("--scenario", default=None, help="Scenario name (default: canonical)")
    g.add_argument("--people", default=None, help="JSON list of [height, count] pairs")
    sp.set_defaults(func=cmd_validate_solver)

    sp = sub.add_parser("build-submission", help="Solve every row of a puzzles CSV")
    sp.add_argument("--puzzles", required=True, help="Input CSV with an id column and a people column")
    sp.add_argument("--output", required=True, help="Output CSV")
    sp.add_argument("--solver", default=str(BASELINE_SOLVER), help="Path to solve_module.py")
    sp.add_argument("--format", default="queue-json", choices=list_formats(), help="Output format slug")
    sp.add_argument("--people-col", default=None, help="Override people column (or set PEOPLE_COL)")
    sp.add_argument("--max-rows", type=int, default=None)
    sp.add_argument(
        "--on-error",
        choices=["raise", "unsolved"],
        default="raise",
        help="On an unsolvable or malformed row: stop, or write UNSOLVED and continue",
    )
    sp.add_argument("--progress", action="store_true", help="Report progress on stderr")
    sp.set_defaults(func=cmd_build_submission)

    sp = sub.add_parser("selftest", help="Offline smoke tests")
    sp.set_defaults(func=cmd_selftest)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
