#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""validate_solve_output.py (queue reconstruction)

Checks a reconstructed queue against the original people list:
- the queue is a permutation of the input pairs
- every person's count equals the number of people in front with height >= theirs
- the queue agrees with an independent reference reconstruction

Either import a solver (`--solver path/to/solve_module.py`, which must define
solve(people) -> queue) or pass a finished answer (`--solution-json`).
"""

import argparse
import importlib.util
import json
import os
import sys
from collections import Counter
from typing import Any, Dict, List, Sequence


class ValidationError(Exception):
    pass


def _is_pair(p: Any) -> bool:
    return (
        isinstance(p, (list, tuple))
        and len(p) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in p)
    )


def count_taller_in_front(queue: Sequence[Sequence[int]], i: int) -> int:
    h = queue[i][0]
    return sum(1 for j in range(i) if queue[j][0] >= h)


def check_invariant(queue: Sequence[Sequence[int]]) -> None:
    for i, (h, k) in enumerate(queue):
        seen = count_taller_in_front(queue, i)
        if seen != k:
            raise ValidationError(
                f"queue[{i}]={[h, k]} expects {k} taller-or-equal in front, found {seen}"
            )


def check_permutation(people: Sequence[Sequence[int]], queue: Sequence[Sequence[int]]) -> None:
    if len(people) != len(queue):
        raise ValidationError(f"queue has {len(queue)} people, input had {len(people)}")
    want = Counter(tuple(p) for p in people)
    got = Counter(tuple(p) for p in queue)
    if want != got:
        missing = sorted((want - got).elements())
        extra = sorted((got - want).elements())
        raise ValidationError(f"queue is not a permutation of the input. missing={missing} extra={extra}")


def reference_queue(people: Sequence[Sequence[int]]) -> List[List[int]]:
    """Tallest first, then insert each person at index == count."""
    out: List[List[int]] = []
    for h, k in sorted(people, key=lambda p: (-p[0], p[1])):
        if k > len(out):
            raise ValidationError(f"no valid queue exists: {[h, k]} needs {k} in front, only {len(out)} are tall enough")
        out.insert(k, [h, k])
    return out


def validate_queue(people: Sequence[Sequence[int]], queue: Sequence[Sequence[int]]) -> Dict[str, Any]:
    if not all(_is_pair(p) for p in queue):
        raise ValidationError("queue must be a list of [height, count] integer pairs")

    check_permutation(people, queue)
    check_invariant(queue)

    return {
        "ok": True,
        "n": len(queue),
        "queue": [list(p) for p in queue],
        "matches_reference": [list(p) for p in queue] == reference_queue(people),
    }


def load_solver_module(path: str):
    path = os.path.abspath(path)
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    spec = importlib.util.spec_from_file_location("solve_module_dynamic", path)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Failed to import solver from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def parse_people(s: str) -> List[List[int]]:
    try:
        v = json.loads(s)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to parse people JSON: {e}")
    if not isinstance(v, list):
        raise ValidationError("People must be a JSON list")
    if not all(_is_pair(p) for p in v):
        raise ValidationError("People must be a list of [height, count] integer pairs")
    if any(x < 0 for p in v for x in p):
        raise ValidationError("Heights and counts must be non-negative")
    return v


def parse_solution_json(s: str) -> List[List[int]]:
    try:
        obj = json.loads(s)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to parse solution JSON: {e}")
    # accept a bare list as well as {"queue": [...]}
    if isinstance(obj, dict):
        obj = obj.get("queue", None)
    if not isinstance(obj, list):
        raise ValidationError("Solution must be a JSON list or an object with key 'queue'")
    return obj


def solve_with(module, people: List[List[int]]) -> List[List[int]]:
    if not hasattr(module, "solve"):
        raise SystemExit("Solver module must define solve(people)")
    try:
        queue = module.solve([list(p) for p in people])
    except Exception as e:
        raise ValidationError(f"solver crashed: {type(e).__name__}: {e}") from e
    if isinstance(queue, dict):
        queue = queue.get("queue")
    if not isinstance(queue, list):
        raise SystemExit("solve() must return the queue as list[[int, int]]")
    return queue


def main(argv=None) -> None:
    ap = argparse.ArgumentParser(description="Validate a reconstructed queue.")
    ap.add_argument(
        "--people",
        default="[[7,0],[4,4],[7,1],[5,0],[6,1],[5,2]]",
        help="Input people as JSON list of [height, count]",
    )
    g = ap.add_mutually_exclusive_group(required=True)
    g.add_argument("--solver", help="Path to solve_module.py that provides solve(people)->queue")
    g.add_argument("--solution-json", help="JSON list (or object with key 'queue') to check")
    args = ap.parse_args(argv)

    try:
        people = parse_people(args.people)
        if args.solver:
            queue = solve_with(load_solver_module(args.solver), people)
        else:
            queue = parse_solution_json(args.solution_json)
        report = validate_queue(people, queue)
        print(json.dumps(report, ensure_ascii=False, indent=2))
    except ValidationError as e:
        err = {"ok": False, "error": str(e)}
        print(json.dumps(err, ensure_ascii=False, indent=2))
        sys.exit(2)


if __name__ == "__main__":
    main()
