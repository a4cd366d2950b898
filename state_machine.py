from __future__ import annotations
import random
import sys
from enum import Enum
from typing import List, Optional
import pygame

from games import DxBallRound, GameSession, RoundEvent
from settings import MAX_NAME_LENGTH, Settings
from systems.leaderboard import PlayerRegistry, Scoreboard
from systems.sound_manager import Cue, SoundManager


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    WIN = "win"


class MenuScreen(Enum):
    MAIN = "main"
    PLAYER_NAME = "player_name"
    SCORE_BOARD = "score_board"


MENU_OPTIONS = ["start", "player_name", "score_board", "exit"]

MENU_KEYS = {
    pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2, pygame.K_4: 3,
    pygame.K_KP1: 0, pygame.K_KP2: 1, pygame.K_KP3: 2, pygame.K_KP4: 3,
}
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)

EVENT_CUES = {
    RoundEvent.PADDLE_HIT: Cue.PADDLE_HIT,
    RoundEvent.BLOCK_DESTROYED: Cue.BLOCK_DESTROYED,
    RoundEvent.LIFE_LOST: Cue.LIFE_LOST,
    RoundEvent.ROUND_WON: Cue.ROUND_WON,
}


class GameStateMachine:
    """Menu and round flow for DX Ball.

    Exactly one GameState is active; the menu screen only matters while in
    MENU. Input is applied synchronously between ticks, and update() runs one
    tick of the active round when PLAYING. Player names and best scores
    (PlayerRegistry) and the run log (Scoreboard) outlive every round.
    """

    def __init__(
        self,
        cfg: Settings,
        sounds: SoundManager,
        players: PlayerRegistry,
        scoreboard: Scoreboard,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = cfg
        self.sounds = sounds
        self.players = players
        self.scoreboard = scoreboard
        self.session = GameSession(cfg.screen_size, rng=rng, player_slots=len(players))
        self.state = GameState.MENU
        self.screen = MenuScreen.MAIN
        self.menu_index = 0
        self.temp_name = ""
        self.menu_pulse = 0.0

    @property
    def round(self) -> DxBallRound:
        return self.session.round

    @property
    def player_slot(self) -> int:
        return self.session.player_slot

    @property
    def player_name(self) -> str:
        return self.players.name(self.session.player_slot)

    # ----- events -----
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            self.handle_key(event.key, getattr(event, "unicode", ""))
        elif event.type == pygame.MOUSEMOTION:
            if self.state is GameState.PLAYING and not self.session.paused:
                self.session.point_paddle(event.pos[0])
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.state is GameState.PLAYING and not self.session.paused:
                self.round.release_ball()

    def handle_key(self, key: int, char: str = "") -> None:
        if self.state is GameState.MENU:
            self._handle_menu_key(key, char)
        elif self.state is GameState.PLAYING:
            self._handle_playing_key(key)
        else:
            self._handle_round_over_key(key)

    def _handle_menu_key(self, key: int, char: str) -> None:
        if self.screen is MenuScreen.PLAYER_NAME:
            self._handle_name_key(key, char)
            return
        if key == pygame.K_m:
            self.toggle_sound()
            return
        if self.screen is MenuScreen.SCORE_BOARD:
            if key == pygame.K_ESCAPE:
                self.show_main_menu()
            return

        if key in MENU_KEYS:
            self.menu_index = MENU_KEYS[key]
            self.sounds.play(Cue.MENU_NAV)
        elif key in (pygame.K_UP, pygame.K_DOWN):
            step = -1 if key == pygame.K_UP else 1
            self.menu_index = (self.menu_index + step) % len(MENU_OPTIONS)
            self.sounds.play(Cue.MENU_NAV)
        elif key in CONFIRM_KEYS:
            self.activate_menu_option(MENU_OPTIONS[self.menu_index])

    def _handle_name_key(self, key: int, char: str) -> None:
        if key in CONFIRM_KEYS:
            # Empty submissions keep the previous name
            self.players.rename(self.player_slot, self.temp_name)
            self.show_main_menu()
        elif key == pygame.K_ESCAPE:
            self.show_main_menu()
        elif key == pygame.K_BACKSPACE:
            self.temp_name = self.temp_name[:-1]
        elif len(char) == 1 and 32 <= ord(char) <= 126:
            if len(self.temp_name) < MAX_NAME_LENGTH:
                self.temp_name += char

    def _handle_playing_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.save_best()
            self.show_main_menu()
        elif key == pygame.K_m:
            self.toggle_sound()
        elif key == pygame.K_p:
            self.session.toggle_pause()
        elif self.session.paused:
            return
        elif key == pygame.K_SPACE:
            self.round.release_ball()
        elif key == pygame.K_LEFT:
            self.session.move_paddle(-1)
        elif key == pygame.K_RIGHT:
            self.session.move_paddle(1)

    def _handle_round_over_key(self, key: int) -> None:
        if key in CONFIRM_KEYS:
            self.finish_round()
            self.session.next_player()
            self.state = GameState.PLAYING
        elif key == pygame.K_ESCAPE:
            self.finish_round()
            self.show_main_menu()
        elif key == pygame.K_m:
            self.toggle_sound()

    # ----- transitions -----
    def activate_menu_option(self, option: str) -> None:
        if option == "start":
            self.start_round()
            self.sounds.play(Cue.MENU_NAV)
        elif option == "player_name":
            self.temp_name = self.player_name
            self.screen = MenuScreen.PLAYER_NAME
            self.sounds.play(Cue.MENU_NAV)
        elif option == "score_board":
            self.save_best()
            self.screen = MenuScreen.SCORE_BOARD
            self.sounds.play(Cue.MENU_NAV)
        elif option == "exit":
            sys.exit(0)

    def start_round(self) -> None:
        self.session.new_round()
        self.state = GameState.PLAYING

    def show_main_menu(self) -> None:
        self.state = GameState.MENU
        self.screen = MenuScreen.MAIN
        self.temp_name = ""
        self.sounds.play(Cue.MENU_NAV)

    def toggle_sound(self) -> bool:
        return self.sounds.toggle()

    def save_best(self) -> int:
        return self.players.save_best(self.player_slot, self.round.score)

    def finish_round(self) -> bool:
        """Persist the best score and log the round; repeated calls are no-ops for the log."""
        self.save_best()
        return self.scoreboard.record(self.round.round_id, self.player_name, self.round.score)

    # ----- tick -----
    def update(self) -> List[RoundEvent]:
        self.menu_pulse = (self.menu_pulse + 0.08) % 10000.0
        if self.state is not GameState.PLAYING:
            return []
        events = self.session.tick()
        for event in events:
            cue = EVENT_CUES.get(event)
            if cue is not None:
                self.sounds.play(cue)
        if RoundEvent.ROUND_LOST in events:
            self.finish_round()
            self.state = GameState.GAME_OVER
        elif RoundEvent.ROUND_WON in events:
            self.finish_round()
            self.state = GameState.WIN
        return events
