"""Transient views produced while captioning a document."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List

from bs4 import Tag


class NodeState(str, enum.Enum):
    TRANSFORMED = "transformed"
    SKIPPED = "skipped"


@dataclass
class CaptionAssembly:
    """Off-tree replacement built for a single target node."""

    container: Tag
    media: Tag
    caption: Tag
    image: Tag
    target: Tag


@dataclass
class CaptionReport:
    """Tally for one pass over a selection."""

    processed: int = 0
    transformed: int = 0
    skipped: int = 0
    detached: List[Tag] = field(default_factory=list)

    def record(self, state: NodeState) -> None:
        self.processed += 1
        if state is NodeState.TRANSFORMED:
            self.transformed += 1
        elif state is NodeState.SKIPPED:
            self.skipped += 1
