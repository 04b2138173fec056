"""Game engine for Spider Solitaire."""

from __future__ import annotations

import logging
import random
from typing import Any, Sequence

from pydantic import ValidationError

from spider_solitaire.config import Config
from spider_solitaire.logging import GameLogger
from spider_solitaire.models.card import RANK_NAMES, SUIT_SYMBOLS, Card, Difficulty, Rank
from spider_solitaire.models.game_state import (
    NUM_COLUMNS,
    SEQUENCE_LENGTH,
    CardState,
    EngineStatus,
    GameState,
)

from .deck import Deck, InvalidDifficultyError, parse_difficulty
from .hints import Hint, find_hint
from .result import CompletedSequence, EngineError, EngineResult, MoveRecord
from .tableau import Tableau
from .validator import MovePolicy

logger = logging.getLogger(__name__)

# Initial deal: first four columns get six cards, the rest five
DEAL_PATTERN = [6, 6, 6, 6, 5, 5, 5, 5, 5, 5]


class GameEngine:
    """Owns the deck, stock and ten columns of one game session.

    Every operation validates before it mutates, so a failed call leaves the
    engine exactly as it was.
    """

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
        """
        self.config = config or Config()
        self.rules = self.config.rules
        self.scoring = self.config.scoring
        self.game_logger = game_logger

        self.status = EngineStatus.IDLE
        self.difficulty = self.config.game.difficulty
        self.policy = self._make_policy(self.difficulty)
        self.columns: list[Tableau] = self._make_columns()
        self.stock: list[Card] = []
        self.history: list[MoveRecord] = []

        self.deck_size = 0
        self.seed: int | None = None
        self.is_challenge = False

        self._score = self.scoring.initial_score
        self._moves = 0
        self.elapsed_time = 0.0
        self.completed_set_count = 0
        self._final_score: int | None = None

    # ------------------------------------------------------------------
    # Queries

    @property
    def score(self) -> int:
        return self._score

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def final_score(self) -> int | None:
        """Score including the win bonus, once the game is won."""
        return self._final_score

    @property
    def is_won(self) -> bool:
        return self.status == EngineStatus.WON

    @property
    def stock_count(self) -> int:
        return len(self.stock)

    @property
    def win_target(self) -> int:
        return self.deck_size // SEQUENCE_LENGTH

    def column_cards(self, column: int) -> list[Card]:
        """Copy of a column's cards, bottom first."""
        return list(self.columns[column].cards)

    def column_run(self, column: int, card_index: int) -> list[Card] | None:
        """Run that would be picked up at ``card_index``, or None."""
        if not 0 <= column < len(self.columns):
            return None
        return self.columns[column].movable_run(card_index)

    def can_accept(self, column: int, run: Sequence[Card]) -> bool:
        if not 0 <= column < len(self.columns):
            return False
        return self.columns[column].can_accept(run)

    def can_draw(self) -> bool:
        """Check whether a stock draw would be accepted."""
        return (
            self.status == EngineStatus.PLAYING
            and len(self.stock) >= len(self.columns)
            and not any(column.is_empty() for column in self.columns)
        )

    def hint(self) -> Hint | None:
        """Suggest a legal move, or None if none exists."""
        if self.status != EngineStatus.PLAYING:
            return None
        return find_hint(self.columns)

    # ------------------------------------------------------------------
    # Game lifecycle

    def new_game(
        self,
        difficulty: int | Difficulty | None = None,
        seed: int | None = None,
        is_challenge: bool = False,
    ) -> EngineResult:
        """Build, shuffle and deal a new game.

        Args:
            difficulty: Number of suits (1, 2 or 4). Defaults to config.
            seed: Shuffle seed. The same seed always gives the same deal.
            is_challenge: Mark the game as a daily challenge.

        Returns:
            EngineResult with the dealt state
        """
        try:
            level = parse_difficulty(
                self.config.game.difficulty if difficulty is None else difficulty
            )
        except InvalidDifficultyError as e:
            return EngineResult.failure(EngineError.INVALID_DIFFICULTY, str(e))

        if seed is None:
            seed = self.config.game.seed

        self.status = EngineStatus.DEALING
        self._reset(level, seed, is_challenge)

        deck = Deck.for_game(level, full_deck=self.rules.full_deck)
        deck.shuffle(random.Random(seed))
        self.deck_size = len(deck)
        self._deal(deck)
        self.stock = deck.cards

        self.status = EngineStatus.PLAYING
        logger.info(
            f"New game: {level.name}, seed={seed}, "
            f"{self.deck_size} cards, stock={len(self.stock)}"
        )
        if self.game_logger:
            self.game_logger.log_game_start(
                int(level), seed, is_challenge, self.columns, len(self.stock)
            )

        return EngineResult(state=self.snapshot())

    def _reset(self, level: Difficulty, seed: int | None, is_challenge: bool) -> None:
        """Drop all cards and counters from the previous game."""
        self.difficulty = level
        self.policy = self._make_policy(level)
        self.columns = self._make_columns()
        self.stock = []
        self.history.clear()

        self.seed = seed
        self.is_challenge = is_challenge

        self._score = self.scoring.initial_score
        self._moves = 0
        self.elapsed_time = 0.0
        self.completed_set_count = 0
        self._final_score = None

    def _deal(self, deck: Deck) -> None:
        """Deal round-robin by row until each column has its quota.

        Stops early if the deck runs out. Only the top card of each column is
        dealt face up.
        """
        for row in range(max(DEAL_PATTERN)):
            for column, quota in zip(self.columns, DEAL_PATTERN):
                if row < quota and not deck.is_empty():
                    column.deal(deck.draw(), face_up=False)

        for column in self.columns:
            column.flip_top()

    def _make_policy(self, level: Difficulty) -> MovePolicy:
        return MovePolicy(level, self.rules.require_same_suit_for_medium)

    def _make_columns(self) -> list[Tableau]:
        return [Tableau(i, self.policy) for i in range(NUM_COLUMNS)]

    def tick(self, seconds: float = 1.0) -> None:
        """Advance the game clock. Ignored unless a game is in progress."""
        if self.status == EngineStatus.PLAYING:
            self.elapsed_time += seconds

    # ------------------------------------------------------------------
    # Player actions

    def _check_active(self) -> EngineResult | None:
        if self.status != EngineStatus.PLAYING:
            return EngineResult.failure(
                EngineError.GAME_NOT_ACTIVE,
                f"No game in progress ({self.status.value})",
            )
        return None

    def move_run(self, from_column: int, card_index: int, to_column: int) -> EngineResult:
        """Move the run starting at ``card_index`` to another column.

        Args:
            from_column: Source column index.
            card_index: Index of the bottom-most card of the run in the source.
            to_column: Destination column index.

        Returns:
            EngineResult
        """
        inactive = self._check_active()
        if inactive:
            return inactive

        if not 0 <= from_column < len(self.columns):
            return EngineResult.failure(
                EngineError.NOT_MOVABLE, f"No such column: {from_column}"
            )
        source = self.columns[from_column]

        run = source.movable_run(card_index)
        if run is None:
            return EngineResult.failure(
                EngineError.NOT_MOVABLE,
                f"Card {card_index} of column {from_column} is not movable",
            )

        if not 0 <= to_column < len(self.columns) or to_column == from_column:
            return EngineResult.failure(
                EngineError.ILLEGAL_DESTINATION, f"Invalid destination: {to_column}"
            )
        dest = self.columns[to_column]

        validation = dest.validate(run)
        if not validation.is_valid:
            return EngineResult.failure(
                EngineError.ILLEGAL_DESTINATION, validation.error_message
            )

        moved, revealed = source.remove_top_run(len(run))
        dest.accept(moved)

        self._moves += 1
        self._score += self.scoring.move_card_points
        self.history.append(MoveRecord(from_column, to_column, len(moved), revealed))

        logger.debug(
            f"Move {self._moves}: {len(moved)} card(s) {from_column} -> {to_column}"
            f"{' (revealed)' if revealed else ''}"
        )
        if self.game_logger:
            self.game_logger.log_move(
                self._moves, from_column, to_column, moved, revealed, self._score
            )

        completed = self.check_completions()
        return EngineResult(
            moved=moved,
            completed=completed,
            revealed=revealed,
            won=self.is_won,
        )

    def draw_from_stock(self) -> EngineResult:
        """Deal one face-up card from the stock onto every column.

        Not undoable; the undo history is cleared.

        Returns:
            EngineResult
        """
        inactive = self._check_active()
        if inactive:
            return inactive

        if not self.stock:
            return EngineResult.failure(EngineError.EMPTY_STOCK, "No cards left in stock")
        if len(self.stock) < len(self.columns):
            return EngineResult.failure(
                EngineError.EMPTY_STOCK,
                f"Not enough cards in stock: {len(self.stock)}",
            )
        if any(column.is_empty() for column in self.columns):
            return EngineResult.failure(
                EngineError.BLOCKED_COLUMN,
                "Every column needs at least one card before dealing",
            )

        dealt = []
        for column in self.columns:
            card = self.stock.pop()
            column.deal(card, face_up=True)
            dealt.append(card)

        self._moves += 1
        self._score -= self.scoring.draw_penalty
        self.history.clear()

        logger.debug(f"Drew from stock, {len(self.stock)} cards left")
        if self.game_logger:
            self.game_logger.log_draw(self._moves, dealt, len(self.stock), self._score)

        completed = self.check_completions()
        return EngineResult(moved=dealt, completed=completed, won=self.is_won)

    def undo(self) -> EngineResult:
        """Revert the most recent move.

        Cards go back to the source column and a card revealed by that move is
        turned face down again.

        Returns:
            EngineResult
        """
        inactive = self._check_active()
        if inactive:
            return inactive

        if not self.history:
            return EngineResult.failure(EngineError.NO_HISTORY, "Nothing to undo")

        record = self.history.pop()
        source = self.columns[record.from_column]
        dest = self.columns[record.to_column]

        cards = dest.take(record.count)
        if record.revealed and source.top is not None:
            source.top.face_up = False
        source.accept(cards)

        self._moves -= 1
        self._score -= self.scoring.move_card_points

        logger.debug(f"Undo: {record.count} card(s) {record.to_column} -> {record.from_column}")
        if self.game_logger:
            self.game_logger.log_undo(
                self._moves, record.from_column, record.to_column, record.count, self._score
            )

        return EngineResult(moved=cards, revealed=record.revealed)

    # ------------------------------------------------------------------
    # Completion and win

    def check_completions(self) -> list[CompletedSequence]:
        """Collect every completed K..A sequence on the tableau.

        Columns are rescanned until none yields a sequence. Collected cards
        leave play, so the undo history is cleared.
        """
        completed: list[CompletedSequence] = []

        found = True
        while found:
            found = False
            for column in self.columns:
                cards = column.extract_completed_sequence()
                if cards is None:
                    continue
                found = True
                self.completed_set_count += 1
                self._score += self.scoring.complete_sequence_points
                completed.append(CompletedSequence(column.index, cards[0].suit, cards))

                logger.info(
                    f"Completed sequence in column {column.index} "
                    f"({self.completed_set_count}/{self.win_target})"
                )
                if self.game_logger:
                    self.game_logger.log_complete(
                        column.index, cards, self.completed_set_count, self._score
                    )

        if completed:
            self.history.clear()
            self.check_win()
        return completed

    def check_win(self) -> bool:
        """Check for and enter the won state.

        Once won, further calls return True without changing anything.
        """
        if self.status == EngineStatus.WON:
            return True
        if self.status != EngineStatus.PLAYING:
            return False
        if self.completed_set_count < self.win_target:
            return False

        self._final_score = self._score + self.win_bonus()
        self.status = EngineStatus.WON

        logger.info(f"Game won: score={self._score}, final={self._final_score}")
        if self.game_logger:
            self.game_logger.log_game_end(
                self._moves, self.elapsed_time, self._score, self._final_score
            )
        return True

    def win_bonus(self) -> int:
        """Bonus for finishing quickly in few moves."""
        s = self.scoring
        time_bonus = max(0, s.time_bonus_base - int(self.elapsed_time))
        move_bonus = max(0, s.move_bonus_base - self._moves * s.move_bonus_factor)
        return time_bonus + move_bonus

    # ------------------------------------------------------------------
    # Persistence

    def snapshot(self) -> GameState | None:
        """Capture the current game, or None before the first deal."""
        if self.status in (EngineStatus.IDLE, EngineStatus.DEALING):
            return None

        return GameState(
            score=self._score,
            moves=self._moves,
            elapsed_time=self.elapsed_time,
            difficulty=self.difficulty,
            completed_set_count=self.completed_set_count,
            deck_size=self.deck_size,
            stock_count=len(self.stock),
            stock=[CardState.from_card(c) for c in self.stock],
            columns=[[CardState.from_card(c) for c in column] for column in self.columns],
            seed=self.seed,
            is_challenge=self.is_challenge,
            won=self.is_won,
            final_score=self._final_score,
        )

    def restore(self, state: GameState | dict[str, Any] | str | bytes) -> EngineResult:
        """Replace the current game with a saved one.

        Args:
            state: GameState, its dict form, or its JSON text.

        Returns:
            EngineResult; CORRUPT_STATE leaves the engine untouched.
        """
        try:
            if isinstance(state, GameState):
                # Revalidate in case the model was built or edited without checks
                state = GameState.model_validate(state.model_dump())
            elif isinstance(state, dict):
                state = GameState.model_validate(state)
            else:
                state = GameState.model_validate_json(state)
        except ValidationError as e:
            logger.warning(f"Rejected saved state: {e.error_count()} error(s)")
            return EngineResult.failure(EngineError.CORRUPT_STATE, str(e))

        self._reset(state.difficulty, state.seed, state.is_challenge)
        self.deck_size = state.deck_size

        for column, saved in zip(self.columns, state.columns):
            column.accept([c.to_card() for c in saved])

        if state.stock is not None:
            self.stock = [c.to_card() for c in state.stock]
        else:
            self.stock = self._placeholder_stock(state)

        self._score = state.score
        self._moves = state.moves
        self.elapsed_time = state.elapsed_time
        self.completed_set_count = state.completed_set_count

        if state.won or self.completed_set_count == self.win_target:
            # Already finished; the game log saw its end when it was played
            self.status = EngineStatus.WON
            self._final_score = (
                state.final_score
                if state.final_score is not None
                else self._score + self.win_bonus()
            )
        else:
            self.status = EngineStatus.PLAYING
            self._final_score = None

        logger.info(
            f"Restored game: {self.difficulty.name}, moves={self._moves}, "
            f"completed={self.completed_set_count}"
        )
        return EngineResult(state=self.snapshot())

    def _placeholder_stock(self, state: GameState) -> list[Card]:
        """Face-down stock rebuilt from the cards missing on the tableau.

        Completed sequences are set aside suit by suit, the remaining cards
        are shuffled with the game seed.
        """
        counts = state.card_counts()
        copies = state.copies_per_card
        sets_left = state.completed_set_count

        cards = []
        for suit in self.difficulty.suits:
            missing = {
                rank: copies - counts[(RANK_NAMES[rank], SUIT_SYMBOLS[suit])] for rank in Rank
            }
            sets = min(min(missing.values()), sets_left)
            sets_left -= sets
            for rank, count in missing.items():
                cards.extend(Card(rank=rank, suit=suit) for _ in range(count - sets))

        random.Random(self.seed).shuffle(cards)
        return cards
