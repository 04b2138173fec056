"""Tests for daily challenges."""

from datetime import date

import pytest

from spider_solitaire.game.daily import (
    CHALLENGE_NAMES,
    challenge_difficulty,
    challenge_for_seed,
    challenge_seed,
    daily_challenge,
    month_challenges,
)
from spider_solitaire.game.engine import GameEngine
from spider_solitaire.logging import format_columns
from spider_solitaire.models.card import Difficulty


class TestDailyChallenge:
    """Tests for daily challenge derivation."""

    def test_seed(self):
        """Test the seed is year * 1000 + day of year."""
        # 1 May 2025 is day 121
        assert challenge_seed(date(2025, 5, 1)) == 2025121
        assert challenge_seed(date(2024, 1, 1)) == 2024001

    @pytest.mark.parametrize(
        "day, expected",
        [
            (date(2025, 5, 3), Difficulty.HARD),  # Saturday
            (date(2025, 5, 4), Difficulty.HARD),  # Sunday
            (date(2025, 5, 5), Difficulty.MEDIUM),  # Monday
            (date(2025, 5, 6), Difficulty.EASY),  # Tuesday
            (date(2025, 5, 7), Difficulty.MEDIUM),  # Wednesday
            (date(2025, 5, 8), Difficulty.EASY),  # Thursday
            (date(2025, 5, 9), Difficulty.MEDIUM),  # Friday
        ],
    )
    def test_difficulty_by_weekday(self, day, expected):
        """Test difficulty follows the day of the week."""
        assert challenge_difficulty(day) == expected

    def test_name(self):
        """Test the display name format."""
        challenge = daily_challenge(date(2025, 5, 1))
        assert challenge.name == f"01.05.2025 - {CHALLENGE_NAMES[121 % 7]}"

    def test_pure(self):
        """Test the same date always gives the same challenge."""
        assert daily_challenge(date(2025, 12, 24)) == daily_challenge(date(2025, 12, 24))

    @pytest.mark.parametrize("day", [date(2025, 5, 1), date(2024, 12, 31), date(2023, 1, 1)])
    def test_challenge_for_seed(self, day):
        """Test the challenge is recovered from its seed."""
        assert challenge_for_seed(challenge_seed(day)) == daily_challenge(day)

    @pytest.mark.parametrize("seed", [None, 7, 2025000, 2025366])
    def test_seed_not_from_a_challenge(self, seed):
        """Test seeds that name no date give no challenge."""
        assert challenge_for_seed(seed) is None

    def test_month(self):
        """Test a month lists one challenge per day."""
        challenges = month_challenges(2024, 2)
        assert len(challenges) == 29
        assert challenges[0].date == date(2024, 2, 1)
        assert challenges[-1].date == date(2024, 2, 29)

    def test_same_day_same_deal(self):
        """Test a challenge deals the same layout every time."""
        challenge = daily_challenge(date(2025, 5, 3))
        engines = [GameEngine(), GameEngine()]
        for engine in engines:
            engine.new_game(challenge.difficulty, challenge.seed, is_challenge=True)

        assert engines[0].is_challenge
        assert format_columns(engines[0].columns, reveal=True) == format_columns(engines[1].columns, reveal=True)
