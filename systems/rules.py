from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass
class GameRuleSet:
    name: str
    data: Dict[str, Any] = field(default_factory=dict)

DEFAULT_RULES = {
    "dx_ball": GameRuleSet(
        name="dx_ball",
        data={
            # Block grid
            "grid_size": (8, 4),  # columns, rows
            "grid_margin": (80.0, 100.0),
            "grid_gap": (10.0, 8.0),
            "block_height": 35.0,
            # Round
            "lives": 3,
            # Paddle
            "paddle_size": (120.0, 20.0),
            "paddle_y": 60.0,
            "paddle_margin": 10.0,
            "paddle_speed": 15.0,
            "paddle_speed_step": 2.0,
            # Ball
            "ball_radius": 10.0,
            "ball_rest_gap": 18.0,
            "serve_velocity": (8.0, 10.0),
            "max_bounce_vx": 12.0,
        },
    ),
}

def get_rules(game: str) -> GameRuleSet:
    return DEFAULT_RULES.get(game, GameRuleSet(name=game))
