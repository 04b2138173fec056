"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from spider_solitaire.models.card import Difficulty


class GameConfig(BaseModel):
    """Defaults for starting a game."""

    model_config = ConfigDict(frozen=True)

    difficulty: Difficulty = Difficulty.EASY
    seed: int | None = None


class RulesConfig(BaseModel):
    """Rules configuration."""

    model_config = ConfigDict(frozen=True)

    # Always play 104 cards (8 sequences), repeating suits at lower difficulties
    full_deck: bool = True
    # Medium accepts any suit unless this is set
    require_same_suit_for_medium: bool = False


class ScoringConfig(BaseModel):
    """Scoring configuration."""

    model_config = ConfigDict(frozen=True)

    initial_score: int = 500
    move_card_points: int = 5
    complete_sequence_points: int = 100
    draw_penalty: int = 1

    # Win bonus: max(0, time_base - seconds) + max(0, move_base - moves * factor)
    time_bonus_base: int = 1000
    move_bonus_base: int = 500
    move_bonus_factor: int = 2


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    show_face_down: bool = False


class GameLogSettings(BaseModel):
    """JSONL game log settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    output_path: str = "logs"


class StorageConfig(BaseModel):
    """Save file settings."""

    model_config = ConfigDict(frozen=True)

    path: str = "spider_save.json"


class Config(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(frozen=True)

    game: GameConfig = GameConfig()
    rules: RulesConfig = RulesConfig()
    scoring: ScoringConfig = ScoringConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogSettings = GameLogSettings()
    storage: StorageConfig = StorageConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
