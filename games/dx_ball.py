from __future__ import annotations
import itertools
import random
from enum import Enum
from typing import Any, Dict, List, Optional

from . import BaseGame
from .entities import Ball, Block, Paddle, build_blocks
from systems.collision import first_overlap
from systems.scoring import ScoreEvent, block_score

_round_ids = itertools.count(1)


class RoundEvent(str, Enum):
    PADDLE_HIT = "paddle-hit"
    BLOCK_DESTROYED = "block-destroyed"
    LIFE_LOST = "life-lost"
    ROUND_LOST = "round-lost"
    ROUND_WON = "round-won"


class RoundOutcome(str, Enum):
    LOST = "lost"
    WON = "won"


class DxBallRound(BaseGame):
    """One round: a fresh block grid, three lives and a ball served from the paddle.

    The paddle belongs to the session and is shared across rounds; everything
    else here is thrown away when the next round starts. Coordinates are y-up
    with the miss line at y=0.
    """
    name = "dx_ball"

    def __init__(
        self,
        paddle: Paddle,
        world_size: tuple[float, float] = (900.0, 700.0),
        rules: Dict[str, Any] | None = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rules)
        self.paddle = paddle
        self.world_width, self.world_height = world_size
        self.rng = rng or random.Random()
        self.round_id = next(_round_ids)
        self.blocks: List[Block] = []
        self.outcome: Optional[RoundOutcome] = None
        self.ball = Ball(0.0, 0.0, 0.0, 0.0, self.rules["ball_radius"])
        self.reset()

    def reset(self) -> None:
        super().reset()
        self.blocks = build_blocks(self.rules, self.world_width, self.world_height)
        self.outcome = None
        self.reset_ball()

    @property
    def blocks_alive(self) -> int:
        return sum(1 for b in self.blocks if b.alive)

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    # ----- ball control -----
    def rest_position(self) -> tuple[float, float]:
        return (self.paddle.center_x, self.paddle.top + self.rules["ball_rest_gap"])

    def reset_ball(self) -> None:
        vx, vy = self.rules["serve_velocity"]
        self.ball.x, self.ball.y = self.rest_position()
        self.ball.vx = vx * self.rng.choice((-1, 1))
        self.ball.vy = vy
        self.ball.stuck = True

    def release_ball(self) -> None:
        self.ball.stuck = False

    def follow_paddle(self) -> None:
        if self.ball.stuck:
            self.ball.x, self.ball.y = self.rest_position()

    # ----- simulation -----
    def update(self) -> List[RoundEvent]:
        """Advance one fixed tick and return what happened, in order."""
        if self.is_over:
            return []
        if self.ball.stuck:
            self.follow_paddle()
            return []

        events: List[RoundEvent] = []
        ball = self.ball
        ball.x += ball.vx
        ball.y += ball.vy

        self._bounce_walls()
        if self._bounce_paddle():
            events.append(RoundEvent.PADDLE_HIT)
        if self._hit_block():
            events.append(RoundEvent.BLOCK_DESTROYED)

        # A miss is checked before the win so a round can only end one way
        if ball.y - ball.radius < 0:
            self.lives -= 1
            events.append(RoundEvent.LIFE_LOST)
            if self.lives > 0:
                self.reset_ball()
            else:
                self.outcome = RoundOutcome.LOST
                events.append(RoundEvent.ROUND_LOST)
                return events

        if self.blocks_alive == 0:
            self.outcome = RoundOutcome.WON
            events.append(RoundEvent.ROUND_WON)
        return events

    def _bounce_walls(self) -> None:
        ball = self.ball
        r = ball.radius
        if ball.x - r < 0:
            ball.x = r
            ball.vx = -ball.vx
        if ball.x + r > self.world_width:
            ball.x = self.world_width - r
            ball.vx = -ball.vx
        if ball.y + r > self.world_height:
            ball.y = self.world_height - r
            ball.vy = -ball.vy

    def _bounce_paddle(self) -> bool:
        ball, pad = self.ball, self.paddle
        r = ball.radius
        if not (ball.y - r < pad.top and ball.y > pad.y):
            return False
        if not (pad.x - r < ball.x < pad.x + pad.w + r):
            return False
        half = pad.w / 2
        # Edge hits inside the radius allowance would exceed 1.0
        offset = max(-1.0, min(1.0, (ball.x - pad.center_x) / half))
        ball.vy = abs(ball.vy)
        ball.vx = offset * self.rules["max_bounce_vx"]
        ball.y = pad.top + r
        return True

    def _hit_block(self) -> bool:
        """Destroy the first alive block touching the ball; at most one per tick."""
        ball = self.ball
        alive = [b for b in self.blocks if b.alive]
        idx = first_overlap(ball.rect, (b.rect for b in alive))
        if idx is None:
            return False
        block = alive[idx]
        block.alive = False

        r = ball.radius
        overlap_left = (ball.x + r) - block.x
        overlap_right = (block.x + block.w) - (ball.x - r)
        overlap_top = (block.y + block.h) - (ball.y - r)
        overlap_bottom = (ball.y + r) - block.y
        smallest = min(abs(overlap_left), abs(overlap_right), abs(overlap_top), abs(overlap_bottom))
        if smallest in (abs(overlap_left), abs(overlap_right)):
            ball.vx = -ball.vx
        else:
            ball.vy = -ball.vy

        self.score += block_score(ScoreEvent(blocks_destroyed=1))
        return True
