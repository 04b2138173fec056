"""Tests for tableau columns."""

import pytest

from spider_solitaire.game.tableau import Tableau
from spider_solitaire.game.validator import MovePolicy
from spider_solitaire.models.card import Difficulty, Rank, Suit

FULL_SPADES = "SK SQ SJ S10 S9 S8 S7 S6 S5 S4 S3 S2 SA"


@pytest.fixture
def build(column_of):
    def _build(codes: str, difficulty: Difficulty = Difficulty.EASY) -> Tableau:
        column = Tableau(0, MovePolicy(difficulty))
        column.cards = column_of(codes)
        return column

    return _build


class TestDealAndAccept:
    """Tests for adding cards."""

    def test_deal_sets_face(self, column_of):
        """Test dealt cards take the requested face."""
        column = Tableau(3)
        card = column_of("#H4")[0]
        column.deal(card, face_up=True)
        assert column.top is card
        assert card.face_up

    def test_accept_appends(self, build, column_of):
        """Test accepted cards go on top."""
        column = build("#S9 H8")
        column.accept(column_of("S7 S6"))
        assert [str(c) for c in column.cards[-2:]] == ["7♠", "6♠"]
        assert len(column) == 4

    def test_can_accept_uses_policy(self, build, column_of):
        """Test acceptance follows the move policy."""
        easy = build("S8")
        hard = build("S8", Difficulty.HARD)
        run = column_of("H7")
        assert easy.can_accept(run)
        assert not hard.can_accept(run)

    def test_empty_column_accepts_anything(self, build, column_of):
        """Test an empty column takes any run."""
        assert build("").can_accept(column_of("H3 H2"))


class TestMovableRun:
    """Tests for movable_run."""

    def test_whole_tail(self, build):
        """Test a valid tail is movable from its first card."""
        column = build("#S2 #H3 SQ SJ S10")
        run = column.movable_run(2)
        assert [c.rank for c in run] == [Rank.QUEEN, Rank.JACK, Rank.TEN]

    def test_top_card_always_movable(self, build):
        """Test the top card alone is always movable."""
        column = build("#S2 SQ H10")
        assert len(column.movable_run(2)) == 1

    def test_broken_run(self, build):
        """Test a suit change below the top blocks longer pickups."""
        column = build("SQ HJ H10")
        assert column.movable_run(0) is None
        assert len(column.movable_run(1)) == 2

    def test_face_down_not_movable(self, build):
        """Test face-down cards are not movable."""
        column = build("#S2 S5")
        assert column.movable_run(0) is None

    def test_out_of_range(self, build):
        """Test an out-of-range index gives no run."""
        column = build("S5")
        assert column.movable_run(1) is None
        assert column.movable_run(-1) is None

    def test_movable_indices(self, build):
        """Test every start of a movable run is listed."""
        column = build("#S2 H9 S8 S7")
        assert column.movable_indices() == [2, 3]


class TestRemoval:
    """Tests for removing cards."""

    def test_remove_reveals(self, build):
        """Test removing a run turns the new top face up."""
        column = build("#S2 S5 S4")
        removed, revealed = column.remove_top_run(2)
        assert [c.rank for c in removed] == [Rank.FIVE, Rank.FOUR]
        assert revealed
        assert column.top.face_up

    def test_remove_without_reveal(self, build):
        """Test nothing is revealed when the new top is already up."""
        column = build("S6 S5 S4")
        _, revealed = column.remove_top_run(1)
        assert not revealed

    def test_take_does_not_flip(self, build):
        """Test take leaves the new top as it is."""
        column = build("#S2 S5")
        column.take(1)
        assert not column.top.face_up

    def test_take_too_many(self, build):
        """Test taking more cards than the column holds raises."""
        with pytest.raises(ValueError):
            build("S5").take(2)


class TestCompletedSequence:
    """Tests for completed sequence extraction."""

    def test_extract_whole_column(self, build):
        """Test a column holding only K..A is emptied."""
        column = build(FULL_SPADES)
        sequence = column.extract_completed_sequence()
        assert [c.rank for c in sequence] == list(reversed(Rank))
        assert all(c.suit == Suit.SPADE for c in sequence)
        assert column.is_empty()

    def test_extract_flips_new_top(self, build):
        """Test the card under a collected sequence is turned up."""
        column = build("#H5 " + FULL_SPADES)
        assert column.extract_completed_sequence() is not None
        assert len(column) == 1
        assert column.top.face_up

    def test_sequence_buried_mid_column(self, build):
        """Test the scan covers every position, not only the tail."""
        column = build("#H5 " + FULL_SPADES + " H9")
        assert column.find_completed_sequence() == 1
        sequence = column.extract_completed_sequence()
        assert len(sequence) == 13
        assert [str(c) for c in column] == ["5♥", "9♥"]
        assert not column.cards[0].face_up

    def test_mixed_suits(self, build):
        """Test a K..A with mixed suits is not collected."""
        column = build(FULL_SPADES.replace("S7", "H7"))
        assert column.extract_completed_sequence() is None
        assert len(column) == 13

    def test_face_down_card_blocks(self, build):
        """Test a face-down card inside K..A blocks collection."""
        column = build(FULL_SPADES.replace("SK", "#SK"))
        assert column.extract_completed_sequence() is None

    def test_too_short(self, build):
        """Test fewer than thirteen cards are never collected."""
        assert build("SQ SJ S10").extract_completed_sequence() is None
