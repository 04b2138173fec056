"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from spider_solitaire.config import Config, load_config
from spider_solitaire.game.engine import GameEngine
from spider_solitaire.models.card import Difficulty


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test default configuration values."""
        config = load_config()
        assert config.game.difficulty == Difficulty.EASY
        assert config.rules.full_deck
        assert config.scoring.initial_score == 500
        assert config.scoring.move_card_points == 5
        assert config.scoring.complete_sequence_points == 100
        assert config.scoring.draw_penalty == 1

    def test_missing_file(self, tmp_path):
        """Test a missing config file falls back to defaults."""
        assert load_config(tmp_path / "nope.yaml") == Config()

    def test_empty_file(self, tmp_path):
        """Test an empty config file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_yaml(self, tmp_path):
        """Test values are read from YAML."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "game:\n"
            "  difficulty: 4\n"
            "  seed: 7\n"
            "rules:\n"
            "  require_same_suit_for_medium: true\n"
            "scoring:\n"
            "  draw_penalty: 0\n"
        )
        config = load_config(path)
        assert config.game.difficulty == Difficulty.HARD
        assert config.game.seed == 7
        assert config.rules.require_same_suit_for_medium
        assert config.scoring.draw_penalty == 0
        assert config.scoring.initial_score == 500

    def test_invalid_difficulty(self, tmp_path):
        """Test an unsupported suit count is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("game:\n  difficulty: 3\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_frozen(self):
        """Test config sections cannot be modified."""
        config = Config()
        with pytest.raises(ValidationError):
            config.scoring.draw_penalty = 5

    def test_scoring_applies(self, tmp_path, layout):
        """Test the engine scores with the configured points."""
        path = tmp_path / "config.yaml"
        path.write_text("scoring:\n  initial_score: 0\n  move_card_points: 10\n")
        engine = GameEngine(load_config(path))
        engine.new_game(1, seed=2)
        layout(engine, ["S5", "S6"])
        engine.move_run(0, 0, 1)
        assert engine.score == 10
