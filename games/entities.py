from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from systems.collision import Rect

Color = Tuple[int, int, int]


@dataclass
class Block:
    x: float
    y: float
    w: float
    h: float
    alive: bool = True
    color: Color = (200, 200, 200)

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.w, self.h)


@dataclass
class Paddle:
    x: float
    y: float
    w: float
    h: float
    speed: float
    margin: float = 10.0
    world_width: float = 900.0

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    @property
    def top(self) -> float:
        return self.y + self.h

    @property
    def min_x(self) -> float:
        return self.margin

    @property
    def max_x(self) -> float:
        return self.world_width - self.w - self.margin

    def clamp(self) -> None:
        self.x = max(self.min_x, min(self.x, self.max_x))

    def nudge(self, direction: int) -> None:
        """Move one speed step left (-1) or right (+1)."""
        self.x += direction * self.speed
        self.clamp()

    def center_on(self, x: float) -> None:
        self.x = x - self.w / 2
        self.clamp()


@dataclass
class Ball:
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    stuck: bool = True

    @property
    def rect(self) -> Rect:
        r = self.radius
        return (self.x - r, self.y - r, r * 2, r * 2)


def _block_color(row: int, col: int, rows: int, cols: int) -> Color:
    # Gradient across columns, shifted per row
    fr = 0.15 + 0.7 * (col / max(1, cols - 1))
    fg = 0.15 + 0.6 * (((row + col) % cols) / max(1, cols - 1))
    fb = 0.35 + 0.5 * (row / max(1, rows - 1))
    return (int(fr * 255), int(fg * 255), int(fb * 255))


def build_blocks(rules: Dict[str, Any], world_width: float, world_height: float) -> List[Block]:
    """Fresh block grid, row-major from the top row down."""
    cols, rows = rules["grid_size"]
    margin_x, margin_y = rules["grid_margin"]
    gap_x, gap_y = rules["grid_gap"]
    bh = rules["block_height"]
    bw = (world_width - 2 * margin_x - (cols - 1) * gap_x) / cols
    return [
        Block(
            x=margin_x + c * (bw + gap_x),
            y=world_height - margin_y - (r + 1) * (bh + gap_y),
            w=bw,
            h=bh,
            color=_block_color(r, c, rows, cols),
        )
        for r in range(rows) for c in range(cols)
    ]
