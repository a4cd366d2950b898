from dataclasses import dataclass, field
from pathlib import Path
import os
from dotenv import load_dotenv
import pygame

BASE_DIR = Path(__file__).resolve().parent
ASSET_DIR = BASE_DIR / "assets"
SOUND_DIR = ASSET_DIR / "sounds"

# Load environment variables from .env file
load_dotenv(BASE_DIR / ".env")

PLAYER_SLOTS = 3
MAX_NAME_LENGTH = 15


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_players() -> list[str]:
    """Player names from DXBALL_PLAYERS, padded/truncated to the slot count."""
    defaults = [f"Player{i + 1}" for i in range(PLAYER_SLOTS)]
    raw = os.getenv("DXBALL_PLAYERS", "")
    names = [name.strip()[:MAX_NAME_LENGTH] for name in raw.split(",")]
    for idx, name in enumerate(names[:PLAYER_SLOTS]):
        if name:
            defaults[idx] = name
    return defaults


@dataclass
class SoundConfig:
    """Sound effects configuration. Override files are looked up in sound_dir."""
    enabled: bool = field(default_factory=lambda: _env_bool("DXBALL_SOUND", True))
    sound_dir: Path = field(default_factory=lambda: Path(os.getenv("DXBALL_SOUND_DIR", str(SOUND_DIR))))
    volume: float = 0.6


@dataclass
class Settings:
    width: int = 900
    height: int = 700
    # Fixed simulation step; the round advances once per tick, no dt scaling
    tick_ms: int = field(default_factory=lambda: _env_int("DXBALL_TICK_MS", 16))
    title: str = "DX Ball"
    player_names: list[str] = field(default_factory=_env_players)

    sound: SoundConfig = None

    def __post_init__(self):
        if self.sound is None:
            self.sound = SoundConfig()
        if self.tick_ms <= 0:
            self.tick_ms = 16

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def fps(self) -> int:
        return max(1, round(1000 / self.tick_ms))


def ensure_directories() -> None:
    for directory in (ASSET_DIR, SOUND_DIR):
        directory.mkdir(parents=True, exist_ok=True)


def init_pygame_window(cfg: Settings) -> pygame.Surface:
    pygame.display.set_caption(cfg.title)
    screen = pygame.display.set_mode(cfg.screen_size)
    # Discrete key presses only; held keys must not repeat KEYDOWN
    pygame.key.set_repeat()
    return screen
