#!/usr/bin/env python3
"""Queue reconstruction from (height, count) pairs.

Each person is a pair [h, k]: h is their height, k is how many people with
height >= h stand in front of them. Given the pairs in arbitrary order,
reorder them so every k is satisfied.

Algorithm (selection by position):
for i = 0..n-1:
  among the unplaced people whose k equals the number of already placed
  heights >= their h, take the shortest and swap it into position i.

The placed heights are kept in a sorted list so the "how many are >= h"
query is a bisect instead of a rescan of the prefix.

The module exposes:
    reconstruct_queue(people) -> people   (in place)
    solve(people) -> queue                (works on a copy)

Script mode:
    python solve_module.py "[[7,0],[4,4],[7,1],[5,0],[6,1],[5,2]]"
prints JSON {"queue": [...]}
"""

from __future__ import annotations

import json
import sys
from bisect import bisect_left, insort
from typing import List, Sequence

Person = List[int]


class QueueError(ValueError):
    pass


class InvalidInput(QueueError):
    pass


class UnsatisfiableInput(QueueError):
    def __init__(self, position: int, remaining: int) -> None:
        super().__init__(
            f"No person can stand at position {position} "
            f"({remaining} left unplaced); input admits no valid queue"
        )
        self.position = position
        self.remaining = remaining


def _check_people(people: List[Person]) -> None:
    if not isinstance(people, list):
        raise InvalidInput(f"people must be a list, got {type(people).__name__}")
    for idx, p in enumerate(people):
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            raise InvalidInput(f"people[{idx}] must be a [height, count] pair, got {p!r}")
        for v in p:
            # bool is an int subclass; reject it explicitly
            if isinstance(v, bool) or not isinstance(v, int):
                raise InvalidInput(f"people[{idx}] must hold integers, got {p!r}")
            if v < 0:
                raise InvalidInput(f"people[{idx}] has a negative value: {p!r}")


def _count_at_least(placed: List[int], height: int) -> int:
    """Number of entries in the sorted list `placed` that are >= height."""
    return len(placed) - bisect_left(placed, height)


def reconstruct_queue(people: List[Person]) -> List[Person]:
    """Reorder `people` in place and return it.

    Raises InvalidInput before touching the list if a pair is malformed, and
    UnsatisfiableInput if some position has no eligible candidate.
    """
    _check_people(people)

    n = len(people)
    placed: List[int] = []

    for i in range(n):
        best = -1
        best_height = -1

        for j in range(i, n):
            height, count = people[j][0], people[j][1]
            if count != _count_at_least(placed, height):
                continue
            # strict < keeps the first candidate among equal heights
            if best == -1 or height < best_height:
                best = j
                best_height = height

        if best == -1:
            raise UnsatisfiableInput(i, n - i)

        people[i], people[best] = people[best], people[i]
        insort(placed, people[i][0])

    return people


def solve(people: Sequence[Sequence[int]]) -> List[Person]:
    """Return a reconstructed copy of `people`; the argument is not mutated."""
    if not isinstance(people, (list, tuple)):
        raise InvalidInput(f"people must be a list, got {type(people).__name__}")
    queue = [list(p) if isinstance(p, (list, tuple)) else p for p in people]
    return reconstruct_queue(queue)


def _main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python solve_module.py '[[7,0],[4,4],[7,1],[5,0]]'", file=sys.stderr)
        raise SystemExit(2)

    try:
        people = json.loads(sys.argv[1])
    except json.JSONDecodeError as e:
        print(f"[!] input is not valid JSON: {e}", file=sys.stderr)
        raise SystemExit(2)

    try:
        queue = solve(people)
    except QueueError as e:
        print(f"[!] {e}", file=sys.stderr)
        raise SystemExit(2)

    print(json.dumps({"queue": queue}))


if __name__ == "__main__":
    _main()
