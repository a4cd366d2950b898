from __future__ import annotations
from typing import Any, Dict, List
from systems.rules import get_rules

class BaseGame:
    """Score/lives bookkeeping shared by round simulations.

    Subclasses build their playfield in reset() and advance it one fixed step
    per update() call, returning the events produced by that step.
    """
    name: str = "base"

    def __init__(self, rules: Dict[str, Any] | None = None):
        self.rules = rules if rules is not None else get_rules(self.name).data
        self.score = 0
        self.lives = self.rules.get("lives", 3)

    def reset(self) -> None:
        self.score = 0
        self.lives = self.rules.get("lives", 3)

    def update(self) -> List[Any]:
        return []


from .entities import Ball, Block, Paddle, build_blocks  # noqa: E402,F401
from .dx_ball import DxBallRound, RoundEvent, RoundOutcome  # noqa: E402,F401
from .session import GameSession  # noqa: E402,F401
