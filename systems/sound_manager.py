from __future__ import annotations
from array import array
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple
import pygame
from settings import SOUND_DIR

class Cue(str, Enum):
    PADDLE_HIT = "paddle-hit"
    BLOCK_DESTROYED = "block-destroyed"
    LIFE_LOST = "life-lost"
    ROUND_WON = "round-won"
    MENU_NAV = "menu-nav"

SOUND_EXT = ".wav"

# cue -> (override file stem, fallback alias)
CUE_SOUNDS: Dict[Cue, Tuple[str, str]] = {
    Cue.BLOCK_DESTROYED: ("cartoon_hit", "SystemAsterisk"),
    Cue.PADDLE_HIT: ("cartoon_paddle", "SystemExclamation"),
    Cue.LIFE_LOST: ("cartoon_lose", "SystemHand"),
    Cue.ROUND_WON: ("cartoon_win", "SystemExit"),
    Cue.MENU_NAV: ("cartoon_menu", "SystemStart"),
}

# alias -> (frequency in Hz, duration in seconds)
ALIAS_TONES: Dict[str, Tuple[float, float]] = {
    "SystemAsterisk": (880.0, 0.07),
    "SystemExclamation": (520.0, 0.05),
    "SystemHand": (180.0, 0.35),
    "SystemExit": (660.0, 0.40),
    "SystemStart": (740.0, 0.04),
}

def synth_tone(freq: float, duration: float, sample_rate: int, channels: int = 1, volume: float = 0.5) -> bytes:
    """Signed 16-bit square wave with a linear fade-out, interleaved per channel."""
    count = max(1, int(sample_rate * duration))
    samples = array("h")
    for i in range(count):
        phase = (i * freq / sample_rate) % 1.0
        level = 1.0 if phase < 0.5 else -1.0
        tail = 1.0 - i / count
        samples.extend([int(level * tail * volume * 32767)] * channels)
    return samples.tobytes()


class SoundManager:
    def __init__(self, sound_dir: Path = SOUND_DIR, enabled: bool = True, volume: float = 0.6):
        self.sound_dir = Path(sound_dir)
        self.enabled = enabled
        self.volume = volume
        self.sounds: Dict[Cue, pygame.mixer.Sound] = {}

    def cue_path(self, cue: Cue) -> Path:
        stem, _ = CUE_SOUNDS[cue]
        return self.sound_dir / f"{stem}{SOUND_EXT}"

    def resolve(self, cue: Cue) -> Tuple[str, str]:
        """("file", path) when the override file exists, otherwise ("alias", name)."""
        path = self.cue_path(cue)
        if path.exists():
            return ("file", path.as_posix())
        return ("alias", CUE_SOUNDS[cue][1])

    def load_cues(self) -> None:
        if not pygame.mixer.get_init():
            print("⚠️  Audio mixer not available - sound effects disabled")
            return
        for cue in Cue:
            sound = self._load(cue)
            if sound is not None:
                sound.set_volume(self.volume)
                self.sounds[cue] = sound

    def _load(self, cue: Cue) -> Optional[pygame.mixer.Sound]:
        kind, target = self.resolve(cue)
        if kind == "file":
            try:
                return pygame.mixer.Sound(target)
            except pygame.error as e:
                print(f"❌ Failed to load {target}: {e}")
                target = CUE_SOUNDS[cue][1]
        return self._alias_sound(target)

    def _alias_sound(self, alias: str) -> Optional[pygame.mixer.Sound]:
        freq, duration = ALIAS_TONES[alias]
        rate, _, channels = pygame.mixer.get_init()
        try:
            return pygame.mixer.Sound(buffer=synth_tone(freq, duration, rate, channels))
        except pygame.error as e:
            print(f"❌ Failed to build fallback sound {alias}: {e}")
            return None

    def play(self, cue: Cue) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(cue)
        if sound:
            sound.play()

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        # Confirmation blip only when turning sound back on
        if self.enabled:
            self.play(Cue.MENU_NAV)
        return self.enabled

    def report(self) -> None:
        print(f"🔊 Sound enabled: {'YES' if self.enabled else 'NO'}")
        for cue in Cue:
            path = self.cue_path(cue)
            print(f"   {path.name} present: {'YES' if path.exists() else 'NO'}")
        print(f"   Place override .wav files in {self.sound_dir} to replace the built-in tones.")

    def stop_all(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.stop()
