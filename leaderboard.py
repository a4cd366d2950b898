from __future__ import annotations
import pygame
from settings import Settings
from systems.leaderboard import PlayerRegistry, Scoreboard
from systems.scoring import format_score

MAX_ROWS = 12

class ScoreBoardView:
    def __init__(self, screen: pygame.Surface, cfg: Settings, font: pygame.font.Font, small_font: pygame.font.Font):
        self.screen = screen
        self.cfg = cfg
        self.font = font
        self.small_font = small_font

    def draw(self, players: PlayerRegistry, scoreboard: Scoreboard, slot: int, round_score: int) -> None:
        self.screen.fill((6, 10, 16))
        cx = self.cfg.width // 2
        title = self.font.render("SCORE BOARD", True, (230, 230, 50))
        self.screen.blit(title, (cx - title.get_width() // 2, 70))

        info = [
            f"Current Player: {players.name(slot)}",
            f"Current Round Score: {round_score}",
            f"Best Score (saved): {players.best[slot]}",
        ]
        for idx, line in enumerate(info):
            text = self.small_font.render(line, True, (240, 240, 240))
            self.screen.blit(text, (cx - 260, 130 + idx * 30))

        header = self.small_font.render("All Recorded Runs (Top entries):", True, (230, 230, 230))
        self.screen.blit(header, (cx - 160, 240))

        ranked = scoreboard.ranked(MAX_ROWS)
        for idx, entry in enumerate(ranked, start=1):
            color = (255, 215, 0) if idx == 1 else (192, 192, 192) if idx == 2 else (205, 127, 50) if idx == 3 else (230, 230, 240)
            line = self.small_font.render(f"{idx:2d}. {entry.name}  -  {format_score(entry.score)}", True, color)
            self.screen.blit(line, (cx - 160, 270 + (idx - 1) * 24))
        if not ranked:
            text = self.small_font.render("(No recorded runs yet)", True, (150, 150, 160))
            self.screen.blit(text, (cx - 140, 270))

        hint = self.small_font.render("Press ESC to go back", True, (200, 200, 255))
        self.screen.blit(hint, (cx - hint.get_width() // 2, self.cfg.height - 80))
