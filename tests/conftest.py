"""Shared fixtures for engine tests."""

import pytest

from spider_solitaire.config import Config
from spider_solitaire.game.engine import GameEngine
from spider_solitaire.logging import parse_card
from spider_solitaire.models.card import Card, Difficulty


def parse_column(codes: str) -> list[Card]:
    """Parse "#S5 HK HQ": a leading # marks a face-down card."""
    return [
        parse_card(token.lstrip("#"), face_up=not token.startswith("#"))
        for token in codes.split()
    ]


@pytest.fixture
def column_of():
    return parse_column


@pytest.fixture
def make_engine():
    """Factory for an engine with a dealt game (seed 1)."""

    def _make(difficulty: Difficulty = Difficulty.EASY, config: Config | None = None) -> GameEngine:
        engine = GameEngine(config)
        result = engine.new_game(difficulty, seed=1)
        assert result.ok
        return engine

    return _make


@pytest.fixture
def layout():
    """Replace an engine's columns and stock with hand-built piles."""

    def _layout(engine: GameEngine, columns: list[str], stock: str = "") -> GameEngine:
        codes_per_column = columns + [""] * (len(engine.columns) - len(columns))
        for column, codes in zip(engine.columns, codes_per_column):
            column.cards = parse_column(codes)
        engine.stock = parse_column(stock)
        engine.history.clear()
        return engine

    return _layout
