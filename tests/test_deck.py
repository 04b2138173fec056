"""Tests for deck construction."""

import random
from collections import Counter

import pytest

from spider_solitaire.game.deck import Deck, InvalidDifficultyError
from spider_solitaire.models.card import Difficulty, Rank, Suit


class TestBuild:
    """Tests for Deck.build."""

    @pytest.mark.parametrize("difficulty", [1, 2, 4])
    def test_deck_size(self, difficulty):
        """Test two packs of N suits."""
        assert len(Deck.build(difficulty)) == 2 * difficulty * 13

    def test_all_face_down(self):
        """Test a new deck is face down."""
        deck = Deck.build(Difficulty.HARD)
        assert not any(card.face_up for card in deck)

    def test_order(self):
        """Test pack, suit, rank order."""
        deck = Deck.build(Difficulty.MEDIUM)
        first = deck.cards[:13]
        assert all(c.suit == Suit.SPADE for c in first)
        assert [c.rank for c in first] == list(Rank)
        assert deck.cards[13].suit == Suit.HEART
        assert deck.cards[26].suit == Suit.SPADE

    def test_suit_counts(self):
        """Test a four-suit deck holds 26 cards of each suit."""
        counts = Counter(c.suit for c in Deck.build(Difficulty.HARD))
        assert counts == {suit: 26 for suit in Suit}

    @pytest.mark.parametrize("difficulty", [0, 3, 5])
    def test_invalid_difficulty(self, difficulty):
        """Test an unsupported suit count raises."""
        with pytest.raises(InvalidDifficultyError):
            Deck.build(difficulty)

    def test_distinct_instances(self):
        """Test duplicate cards are separate objects."""
        deck = Deck.build(Difficulty.EASY)
        assert deck.cards[0] == deck.cards[13]
        assert deck.cards[0] is not deck.cards[13]


class TestForGame:
    """Tests for Deck.for_game."""

    @pytest.mark.parametrize("difficulty", [1, 2, 4])
    def test_full_deck(self, difficulty):
        """Test games always use 104 cards by default."""
        deck = Deck.for_game(difficulty)
        counts = Counter(c.suit for c in deck)
        assert len(deck) == 104
        assert len(counts) == difficulty
        assert set(counts.values()) == {104 // difficulty}

    @pytest.mark.parametrize("difficulty", [1, 2, 4])
    def test_plain_deck(self, difficulty):
        """Test the plain deck holds two packs of the suits in play."""
        assert len(Deck.for_game(difficulty, full_deck=False)) == 26 * difficulty


class TestShuffle:
    """Tests for shuffling."""

    def test_same_seed_same_order(self):
        """Test shuffling with one seed is reproducible."""
        deck1 = Deck.build(Difficulty.HARD)
        deck2 = Deck.build(Difficulty.HARD)
        deck1.shuffle(random.Random(42))
        deck2.shuffle(random.Random(42))
        assert [str(c) for c in deck1] == [str(c) for c in deck2]

    def test_shuffle_changes_order(self):
        """Test shuffling changes the order."""
        deck = Deck.build(Difficulty.HARD)
        before = [str(c) for c in deck]
        deck.shuffle(random.Random(7))
        after = [str(c) for c in deck]
        assert before != after
        assert sorted(before) == sorted(after)

    def test_draw(self):
        """Test draw takes the top card."""
        deck = Deck.build(Difficulty.EASY)
        top = deck.cards[-1]
        assert deck.draw() is top
        assert len(deck) == 25
