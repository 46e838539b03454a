"""Scenario registry.

Named example inputs for the queue solver. They drive the `demo` command,
smoke validation in `selftest`, and the test suite.

Each scenario is keyed by name (case-insensitive), with optional aliases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Scenario:
    key: str

    # [height, count] pairs in input order
    people: Tuple[Tuple[int, int], ...]

    # Known answer, if any. None means "check the invariant only".
    expected: Optional[Tuple[Tuple[int, int], ...]] = None

    description: str = ""
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def people_list(self) -> List[List[int]]:
        return [list(p) for p in self.people]

    def expected_list(self) -> Optional[List[List[int]]]:
        if self.expected is None:
            return None
        return [list(p) for p in self.expected]


def _norm(s: str) -> str:
    return s.strip().lower()


def _pairs(*items: Tuple[int, int]) -> Tuple[Tuple[int, int], ...]:
    return tuple(items)


_SCENARIOS: List[Scenario] = [
    Scenario(
        key="canonical",
        people=_pairs((7, 0), (4, 4), (7, 1), (5, 0), (6, 1), (5, 2)),
        expected=_pairs((5, 0), (7, 0), (5, 2), (6, 1), (4, 4), (7, 1)),
        description="the textbook example for this puzzle",
        aliases=("textbook", "example"),
    ),
    Scenario(
        key="demo",
        people=_pairs((9, 0), (7, 0), (1, 9), (3, 0), (2, 7), (5, 3), (6, 0), (3, 4), (6, 2), (5, 2)),
        description="ten people, used by `pipeline_cli.py demo`",
        aliases=("ten-person",),
    ),
    Scenario(
        key="empty",
        people=_pairs(),
        expected=_pairs(),
        description="nobody in line",
    ),
    Scenario(
        key="single",
        people=_pairs((5, 0)),
        expected=_pairs((5, 0)),
        description="one person",
    ),
    Scenario(
        key="equal-heights",
        people=_pairs((5, 2), (5, 0), (5, 1)),
        expected=_pairs((5, 0), (5, 1), (5, 2)),
        description="everyone is the same height",
        aliases=("ties",),
    ),
]


# Build lookup with aliases
_REGISTRY: Dict[str, Scenario] = {}
for scenario in _SCENARIOS:
    _REGISTRY[_norm(scenario.key)] = scenario
    for alias in scenario.aliases:
        _REGISTRY[_norm(alias)] = scenario


def get_scenario(name: str) -> Optional[Scenario]:
    return _REGISTRY.get(_norm(name))


def list_scenarios() -> List[Scenario]:
    return list(_SCENARIOS)
