from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(init=False)
class FormatConfig:
    """Output rules for a batch of reconstructed queues.

    Notes
    -----
    The adapter always builds an internal record with keys:
      - id
      - queue
    plus every original field from the puzzles CSV row.

    `submission_headers` are the column names to write.
    `header_keys` are the keys to pull from the internal record for each column.

    Example:
        submission_headers=["puzzle_id","answer"]
        header_keys=["id","queue"]

    writes the record's 'id' under 'puzzle_id' and 'queue' under 'answer'.

    `pair_joiner` controls how a queue is rendered: None writes JSON
    (``[[5,0],[7,0]]``), any string writes ``h:k`` tokens joined by it.
    """

    slug: str
    submission_headers: List[str] | None = None
    header_keys: List[str] | None = None
    puzzles_id_field: str = "id"
    queue_key: str = "queue"
    pair_joiner: str | None = None

    def __init__(
        self,
        slug: str,
        submission_headers: List[str] | None = None,
        header_keys: List[str] | None = None,
        puzzles_id_field: str = "id",
        queue_key: str = "queue",
        pair_joiner: str | None = None,
        **kwargs,
    ):
        # Short aliases
        if "id_col" in kwargs and puzzles_id_field == "id":
            puzzles_id_field = kwargs.pop("id_col")
        if "joiner" in kwargs and pair_joiner is None:
            pair_joiner = kwargs.pop("joiner")
        if kwargs:
            raise TypeError(f"Unknown FormatConfig options: {sorted(kwargs)}")

        self.slug = slug
        self.submission_headers = submission_headers if submission_headers is not None else ["id", "queue"]
        self.header_keys = header_keys if header_keys is not None else ["id", "queue"]
        self.puzzles_id_field = puzzles_id_field
        self.queue_key = queue_key
        self.pair_joiner = pair_joiner


DEFAULT = FormatConfig(slug="queue-json")


REGISTRY: Dict[str, FormatConfig] = {
    "queue-json": DEFAULT,
    "queue-pairs": FormatConfig(
        slug="queue-pairs",
        submission_headers=["id", "queue"],
        header_keys=["id", "queue"],
        id_col="id",
        joiner=" ",
    ),
    # echoes the input next to the answer
    "echo-people": FormatConfig(
        slug="echo-people",
        submission_headers=["id", "people", "queue"],
        header_keys=["id", "people", "queue"],
    ),
}


def get_config(slug: str) -> FormatConfig:
    return REGISTRY.get(slug, DEFAULT)


def list_formats() -> List[str]:
    return sorted(REGISTRY)
