from __future__ import annotations
import math
import pygame

from games import Ball, Block, Paddle
from leaderboard import ScoreBoardView
from settings import Settings
from state_machine import GameState, GameStateMachine, MENU_OPTIONS, MenuScreen

MENU_LABELS = {
    "start": "START GAME",
    "player_name": "PLAYER NAME",
    "score_board": "SCORE BOARD",
    "exit": "EXIT",
}


class Renderer:
    """Draws a read-only view of the state machine. World space is y-up."""

    def __init__(self, screen: pygame.Surface, cfg: Settings):
        self.screen = screen
        self.cfg = cfg
        self.title_font = pygame.font.SysFont("timesnewroman", 34, bold=True)
        self.font = pygame.font.SysFont("arial", 22)
        self.small_font = pygame.font.SysFont("consolas", 16)
        self.scoreboard_view = ScoreBoardView(screen, cfg, self.title_font, self.font)

    def to_screen(self, x: float, y: float) -> tuple[int, int]:
        return int(x), int(self.cfg.height - y)

    def world_rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(int(x), int(self.cfg.height - (y + h)), int(w), int(h))

    def draw(self, machine: GameStateMachine) -> None:
        if machine.state is GameState.MENU:
            if machine.screen is MenuScreen.MAIN:
                self.draw_main_menu(machine)
            elif machine.screen is MenuScreen.PLAYER_NAME:
                self.draw_player_name(machine)
            else:
                self.scoreboard_view.draw(machine.players, machine.scoreboard, machine.player_slot, machine.round.score)
            return
        self.draw_game(machine)
        if machine.state is GameState.GAME_OVER:
            self.draw_overlay("GAME OVER", (255, 80, 80), machine.round.score)
        elif machine.state is GameState.WIN:
            self.draw_overlay("YOU WIN!", (100, 255, 150), machine.round.score)

    def _gradient(self, top: tuple[int, int, int], bottom: tuple[int, int, int]) -> None:
        h = self.cfg.height
        for y in range(0, h, 4):
            t = y / h
            color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
            pygame.draw.rect(self.screen, color, (0, y, self.cfg.width, 4))

    def _text(self, text: str, font: pygame.font.Font, color, pos: tuple[int, int], center: bool = False) -> None:
        surf = font.render(text, True, color)
        x, y = pos
        if center:
            x -= surf.get_width() // 2
        self.screen.blit(surf, (x, y))

    # ----- menu screens -----
    def draw_main_menu(self, machine: GameStateMachine) -> None:
        self._gradient((20, 5, 30), (5, 20, 25))
        cx = self.cfg.width // 2
        self._text("DX BALL", self.title_font, (140, 240, 250), (cx, 80), center=True)
        for idx, option in enumerate(MENU_OPTIONS):
            label = f"{idx + 1}. {MENU_LABELS[option]}"
            if option == "player_name":
                label += f": {machine.player_name}"
            if idx == machine.menu_index:
                pulse = 0.6 + 0.4 * (0.5 * (1.0 + math.sin(machine.menu_pulse)))
                color = (int(pulse * 150), int(pulse * 240), 255)
            else:
                color = (230, 230, 240)
            self._text(label, self.font, color, (cx - 120, 170 + idx * 50))

        footer = "Use NUMBER KEYS 1-4 to select menu  |  ENTER to confirm  |  ESC to go back"
        self._text(footer, self.small_font, (180, 200, 230), (cx, self.cfg.height - 120), center=True)
        state = "ON (Press M to mute)" if machine.sounds.enabled else "OFF (Press M to unmute)"
        self._text(f"Sound: {state}", self.small_font, (200, 215, 255), (cx, self.cfg.height - 90), center=True)

    def draw_player_name(self, machine: GameStateMachine) -> None:
        self._gradient((15, 8, 23), (8, 15, 20))
        cx = self.cfg.width // 2
        self._text("CHANGE PLAYER NAME", self.title_font, (230, 180, 50), (cx, 80), center=True)
        self._text(f"Current Player: {machine.player_name}", self.font, (240, 240, 240), (cx, 150), center=True)
        self._text(f"Player {machine.player_slot + 1} of {len(machine.players)}", self.font, (240, 240, 240), (cx, 185), center=True)
        self._text("Enter new name:", self.font, (240, 240, 240), (cx, 245), center=True)
        box = pygame.Rect(cx - 100, 275, 200, 32)
        pygame.draw.rect(self.screen, (38, 38, 56), box)
        self._text(machine.temp_name + "_", self.font, (255, 240, 115), (box.x + 10, box.y + 4))
        self._text("Type name and press ENTER", self.small_font, (200, 200, 255), (cx, 340), center=True)
        self._text("ESC to cancel", self.small_font, (200, 200, 255), (cx, 362), center=True)

    # ----- playfield -----
    def draw_game(self, machine: GameStateMachine) -> None:
        self._gradient((8, 30, 46), (5, 15, 30))
        rnd = machine.round
        for block in rnd.blocks:
            if block.alive:
                self.draw_block(block)
        self.draw_paddle(machine.session.paddle)
        self.draw_ball(rnd.ball)
        self.draw_hud(machine)

    def draw_block(self, block: Block) -> None:
        rect = self.world_rect(block.x, block.y, block.w, block.h)
        pygame.draw.rect(self.screen, block.color, rect)
        bevel = pygame.Rect(rect.x + 2, rect.y, rect.width - 4, 8)
        pygame.draw.rect(self.screen, tuple(min(255, c + 30) for c in block.color), bevel)
        pygame.draw.rect(self.screen, (5, 5, 5), rect, width=1)

    def draw_paddle(self, paddle: Paddle) -> None:
        rect = self.world_rect(paddle.x, paddle.y, paddle.w, paddle.h)
        pygame.draw.rect(self.screen, (30, 180, 75), rect)
        pygame.draw.rect(self.screen, (60, 210, 105), (rect.x + 2, rect.y + 2, rect.width - 4, 4))
        pygame.draw.rect(self.screen, (5, 13, 8), rect, width=2)

    def draw_ball(self, ball: Ball) -> None:
        center = self.to_screen(ball.x, ball.y)
        r = int(ball.radius)
        pygame.draw.circle(self.screen, (40, 128, 230), center, r)
        pygame.draw.circle(self.screen, (150, 215, 255), (center[0] - r // 3, center[1] - r // 3), max(1, r // 3))
        pygame.draw.circle(self.screen, (8, 20, 38), center, r, width=1)

    def draw_hud(self, machine: GameStateMachine) -> None:
        rnd = machine.round
        pygame.draw.rect(self.screen, (13, 13, 15), (10, 10, 330, 50))
        self._text(f"Score: {rnd.score}", self.font, (230, 230, 240), (20, 12))
        self._text(f"Lives: {rnd.lives}", self.small_font, (230, 230, 240), (20, 40))
        self._text(f"Player: {machine.player_name}", self.small_font, (230, 230, 240), (140, 40))
        self._text(f"Speed: {int(machine.session.paddle.speed)}", self.small_font, (230, 230, 240), (140, 16))
        sound = "ON" if machine.sounds.enabled else "OFF"
        self._text(f"Sound: {sound}", self.small_font, (240, 230, 150), (240, 16))
        if machine.session.paused:
            self._text("PAUSED", self.title_font, (255, 255, 255), (self.cfg.width // 2, self.cfg.height // 2), center=True)

        help_lines = ["Arrow Keys/Mouse: Move", "SPACE: Release Ball", "P: Pause", "ESC: Menu | M: Toggle Sound"]
        for idx, line in enumerate(help_lines):
            self._text(line, self.small_font, (230, 230, 240), (self.cfg.width - 300, 12 + idx * 20))

    def draw_overlay(self, title: str, color, score: int) -> None:
        overlay = pygame.Surface(self.cfg.screen_size, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        self.screen.blit(overlay, (0, 0))
        cx, cy = self.cfg.width // 2, self.cfg.height // 2
        self._text(title, self.title_font, color, (cx, cy - 60), center=True)
        self._text(f"Score: {score}", self.font, (255, 255, 255), (cx, cy - 10), center=True)
        self._text("Press ENTER for next player", self.small_font, (200, 200, 255), (cx, cy + 30), center=True)
        self._text("ESC for Menu", self.small_font, (200, 200, 255), (cx, cy + 52), center=True)
