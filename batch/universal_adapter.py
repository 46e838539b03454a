"""Solve a CSV of queue puzzles and write one answer row per puzzle.

The people column is picked once from the CSV header: an explicit name,
then the PEOPLE_COL environment variable, then the first of PEOPLE_COLUMNS
present. A blank cell is a puzzle with nobody in line.
"""

from __future__ import annotations

import csv
import json
import os
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .format_registry import FormatConfig, get_config

UNSOLVED = "UNSOLVED"

PEOPLE_COLUMNS = ["people", "pairs", "input"]

SolverRet = Union[str, List[List[int]], Dict[str, Any]]


def parse_people(s: str) -> List[List[int]]:
    """Parse people from JSON '[[7,0],[4,4]]'; blank means nobody."""
    s = s.strip()
    if not s:
        return []
    obj = json.loads(s)
    if not isinstance(obj, list):
        raise ValueError(f"people must be a JSON list, got {type(obj).__name__}")
    return obj


def people_column(fieldnames: Sequence[str], override: Optional[str] = None) -> str:
    col = override or os.getenv("PEOPLE_COL", "").strip()
    if col:
        if col not in fieldnames:
            raise KeyError(f"people column {col!r} not found in CSV. Fields: {list(fieldnames)}")
        return col

    for candidate in PEOPLE_COLUMNS:
        if candidate in fieldnames:
            return candidate

    raise KeyError(
        f"Could not infer people column (tried {PEOPLE_COLUMNS}). Pass --people-col or set PEOPLE_COL."
    )


def render_queue(queue: Sequence[Sequence[int]], cfg: FormatConfig) -> str:
    if cfg.pair_joiner is None:
        return json.dumps([list(p) for p in queue], separators=(",", ":"))
    return cfg.pair_joiner.join(f"{h}:{k}" for h, k in queue)


def _render_result(out: SolverRet, cfg: FormatConfig) -> str:
    if isinstance(out, str):
        return out
    if isinstance(out, dict):
        out = out.get(cfg.queue_key, out.get("queue", ""))
        if isinstance(out, str):
            return out
    if isinstance(out, (list, tuple)):
        return render_queue(out, cfg)
    return ""


def build_submission(
    puzzles_csv: str,
    output_csv: str,
    fmt: str,
    solve_fn: Callable[[List[List[int]]], SolverRet],
    people_col: Optional[str] = None,
    max_rows: Optional[int] = None,
    on_error: str = "raise",
    progress: bool = False,
) -> int:
    """Solve every row of `puzzles_csv` into `output_csv`. Returns the row count.

    With on_error="unsolved" a row whose people cell is not valid JSON, or
    whose solver raises ValueError (InvalidInput, UnsatisfiableInput), is
    written as UNSOLVED and reported on stderr. Otherwise the error propagates.
    """
    cfg = get_config(fmt)
    with open(puzzles_csv, newline="") as f:
        reader = csv.DictReader(f)
        fields = reader.fieldnames or []
        if cfg.puzzles_id_field not in fields:
            raise ValueError(f"'{cfg.puzzles_id_field}' column not found in {puzzles_csv}. Fields: {fields}")
        col = people_column(fields, people_col)
        rows = list(reader)

    if max_rows is not None:
        rows = rows[:max_rows]

    os.makedirs(os.path.dirname(output_csv) or ".", exist_ok=True)
    with open(output_csv, "w", newline="") as w:
        writer = csv.writer(w)
        writer.writerow(cfg.submission_headers)

        for i, row in enumerate(rows, 1):
            rid = row[cfg.puzzles_id_field]
            cell = row.get(col) or ""
            record: Dict[str, Any] = dict(row)
            record["id"] = rid
            record["people"] = cell.strip()

            try:
                people = parse_people(cell)
                record["people"] = json.dumps(people, separators=(",", ":"))
                record["queue"] = _render_result(solve_fn(people), cfg)
            except ValueError as e:
                if on_error != "unsolved":
                    raise
                print(f"[!] row {rid!r}: {e}", file=sys.stderr)
                record["queue"] = UNSOLVED

            writer.writerow([record.get(k) for k in cfg.header_keys])

            if progress:
                sys.stderr.write(f"\r[batch] {i}/{len(rows)} rows")
        if progress and rows:
            sys.stderr.write("\n")

    return len(rows)
