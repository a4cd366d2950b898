from __future__ import annotations
from dataclasses import dataclass

BLOCK_POINTS = 10

@dataclass
class ScoreEvent:
    blocks_destroyed: int = 0

def block_score(event: ScoreEvent) -> int:
    return event.blocks_destroyed * BLOCK_POINTS

FORMAT_SUFFIX = {0: "", 1: " pt", 2: " pts"}

def format_score(score: int) -> str:
    suffix = FORMAT_SUFFIX[min(len(FORMAT_SUFFIX) - 1, score if score < 3 else 2)]
    return f"{score}{suffix}"
