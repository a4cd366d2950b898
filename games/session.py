from __future__ import annotations
import random
from typing import Any, Dict, Optional

from .dx_ball import DxBallRound
from .entities import Paddle
from systems.rules import get_rules


class GameSession:
    """Everything that belongs to the current sitting at the table.

    Owns the paddle (its position and speed survive across rounds), the active
    round (replaced wholesale by new_round()) and the current player slot.
    """

    def __init__(
        self,
        world_size: tuple[float, float] = (900.0, 700.0),
        rules: Dict[str, Any] | None = None,
        rng: Optional[random.Random] = None,
        player_slots: int = 3,
    ):
        self.rules = rules if rules is not None else get_rules("dx_ball").data
        self.world_size = world_size
        self.rng = rng or random.Random()
        self.player_slots = player_slots
        self.player_slot = 0
        self.paused = False
        pw, ph = self.rules["paddle_size"]
        self.paddle = Paddle(
            x=(world_size[0] - pw) / 2,
            y=self.rules["paddle_y"],
            w=pw,
            h=ph,
            speed=self.rules["paddle_speed"],
            margin=self.rules["paddle_margin"],
            world_width=world_size[0],
        )
        self.round = self._make_round()

    def _make_round(self) -> DxBallRound:
        return DxBallRound(self.paddle, self.world_size, self.rules, self.rng)

    def new_round(self) -> DxBallRound:
        self.paused = False
        self.round = self._make_round()
        return self.round

    def next_player(self) -> int:
        """Rotate to the next slot; each rotation makes the paddle faster."""
        self.player_slot = (self.player_slot + 1) % self.player_slots
        self.paddle.speed += self.rules["paddle_speed_step"]
        self.new_round()
        return self.player_slot

    # ----- paddle input, applied between ticks -----
    def move_paddle(self, direction: int) -> None:
        self.paddle.nudge(direction)
        self.round.follow_paddle()

    def point_paddle(self, x: float) -> None:
        self.paddle.center_on(x)
        self.round.follow_paddle()

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def tick(self):
        if self.paused:
            return []
        return self.round.update()
