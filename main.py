from __future__ import annotations
import sys
import pygame
from settings import Settings, ensure_directories, init_pygame_window
from renderer import Renderer
from state_machine import GameStateMachine
from systems.leaderboard import PlayerRegistry, Scoreboard
from systems.sound_manager import SoundManager

SAMPLE_RATE = 22050

class DxBallApp:
    def __init__(self):
        ensure_directories()
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 1)
        pygame.init()
        self.cfg = Settings()
        self.sounds = SoundManager(self.cfg.sound.sound_dir, enabled=self.cfg.sound.enabled, volume=self.cfg.sound.volume)
        self.init_audio()
        self.screen = init_pygame_window(self.cfg)
        self.clock = pygame.time.Clock()
        # Process-lifetime registries; rounds come and go inside the state machine
        self.players = PlayerRegistry(self.cfg.player_names)
        self.scoreboard = Scoreboard()
        self.machine = GameStateMachine(self.cfg, self.sounds, self.players, self.scoreboard)
        self.renderer = Renderer(self.screen, self.cfg)

    def init_audio(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            print(f"⚠️  Audio device unavailable ({e}) - continuing without sound")
        self.sounds.load_cues()
        self.sounds.report()

    def cleanup(self) -> None:
        """Clean up resources before exit."""
        self.sounds.stop_all()
        pygame.quit()

    def run(self) -> None:
        try:
            while True:
                # Fixed-rate tick: input first, then exactly one simulation step
                self.clock.tick(self.cfg.fps)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        sys.exit(0)
                    self.machine.handle_event(event)
                self.machine.update()
                self.renderer.draw(self.machine)
                pygame.display.flip()
        finally:
            self.cleanup()

def main() -> None:
    DxBallApp().run()

if __name__ == "__main__":
    main()
