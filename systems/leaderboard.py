from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from settings import MAX_NAME_LENGTH, PLAYER_SLOTS

@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int


class PlayerRegistry:
    """Names and best scores for the fixed player slots.

    Lives for the whole process; rounds report into it but it keeps no
    reference back to them.
    """

    def __init__(self, names: Optional[Sequence[str]] = None):
        names = list(names or [])
        self.names: List[str] = [
            (names[i] if i < len(names) and names[i] else f"Player{i + 1}")[:MAX_NAME_LENGTH]
            for i in range(PLAYER_SLOTS)
        ]
        self.best: List[int] = [0] * PLAYER_SLOTS

    def __len__(self) -> int:
        return len(self.names)

    def name(self, slot: int) -> str:
        return self.names[slot]

    def rename(self, slot: int, name: str) -> bool:
        """Set a slot's display name. Empty names are ignored and keep the old one."""
        if not name or not 0 <= slot < len(self.names):
            return False
        self.names[slot] = name[:MAX_NAME_LENGTH]
        return True

    def save_best(self, slot: int, score: int) -> int:
        if 0 <= slot < len(self.best):
            self.best[slot] = max(self.best[slot], score)
        return self.best[slot]

    def next_slot(self, slot: int) -> int:
        return (slot + 1) % len(self.names)


class Scoreboard:
    """Append-only log of finished runs.

    Each round is recorded at most once, keyed by its round id, no matter how
    many exit paths ask for it.
    """

    def __init__(self):
        self._entries: List[ScoreEntry] = []
        self._recorded: Set[int] = set()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[ScoreEntry, ...]:
        return tuple(self._entries)

    def is_recorded(self, round_id: int) -> bool:
        return round_id in self._recorded

    def record(self, round_id: int, name: str, score: int) -> bool:
        if round_id in self._recorded or not name:
            return False
        self._entries.append(ScoreEntry(name, score))
        self._recorded.add(round_id)
        return True

    def ranked(self, limit: Optional[int] = None) -> List[ScoreEntry]:
        """Display order: highest score first, ties by name."""
        ordered = sorted(self._entries, key=lambda e: (-e.score, e.name))
        return ordered if limit is None else ordered[:limit]
