from collections.abc import Sequence
from typing import Protocol

from loguru import logger

from app.core.enums import MatchOutcome, MatchState, RoundOutcome
from app.core.exceptions import InvalidHandError, InvalidRoundIndexError, MatchNotInProgressError
from app.engine.battle import resolve
from app.engine.progression import PlayerProgress
from app.schemas.card import Card
from app.schemas.match import MatchHand, MatchScore, MatchSummary, RoundResult


class OpponentStrategy(Protocol):
    def choose(self, hand: Sequence[Card]) -> int:
        """Return the index of the card the opponent plays from its remaining hand."""
        ...


class FirstCardStrategy:
    def choose(self, hand: Sequence[Card]) -> int:
        return 0


class Match:
    """One player hand against an equal-size opponent hand, one card each per round.

    Not safe for concurrent use: the owner must serialize calls on an instance.
    When a ``player`` is attached, round rewards are applied to it as each
    round resolves and the rating delta once when the last round resolves.
    """

    def __init__(
        self, player: PlayerProgress | None = None, strategy: OpponentStrategy | None = None
    ) -> None:
        self.player = player
        self.strategy = strategy or FirstCardStrategy()

        self.state = MatchState.NOT_STARTED
        self.player_hand: list[Card] = []
        self.opponent_hand: list[Card] = []
        self.player_wins = 0
        self.opponent_wins = 0
        self.rounds: list[RoundResult] = []
        self._summary: MatchSummary | None = None

    def start(self, player_hand: Sequence[Card], opponent_hand: Sequence[Card]) -> None:
        if self.state is not MatchState.NOT_STARTED:
            msg = f"Match cannot be started from state {self.state}"
            raise MatchNotInProgressError(msg)
        if not player_hand:
            msg = "A match needs at least one card per side"
            raise InvalidHandError(msg)
        if len(player_hand) != len(opponent_hand):
            msg = f"Hands differ in size: {len(player_hand)} vs {len(opponent_hand)}"
            raise InvalidHandError(msg)

        self.player_hand = list(player_hand)
        self.opponent_hand = list(opponent_hand)
        self.player_wins = 0
        self.opponent_wins = 0
        self.state = MatchState.IN_PROGRESS

    @property
    def rounds_played(self) -> int:
        return len(self.rounds)

    @property
    def rating_delta(self) -> int:
        return self.player_wins - self.opponent_wins

    def outcome(self) -> MatchOutcome:
        if self.player_wins > self.opponent_wins:
            return MatchOutcome.PLAYER
        if self.opponent_wins > self.player_wins:
            return MatchOutcome.OPPONENT
        return MatchOutcome.DRAW

    def play_round(self, index: int) -> RoundResult:
        if self.state is not MatchState.IN_PROGRESS:
            msg = "No match in progress"
            raise MatchNotInProgressError(msg)
        if not 0 <= index < len(self.player_hand):
            raise InvalidRoundIndexError(index=index, hand_size=len(self.player_hand))

        opponent_index = self.strategy.choose(self.opponent_hand)
        if not 0 <= opponent_index < len(self.opponent_hand):
            msg = f"Opponent strategy picked invalid index {opponent_index}"
            raise ValueError(msg)

        player_card = self.player_hand.pop(index)
        opponent_card = self.opponent_hand.pop(opponent_index)

        battle = resolve(player_card, opponent_card)
        if battle.is_draw:
            outcome = RoundOutcome.DRAW
        elif battle.winner == player_card:
            outcome = RoundOutcome.WIN
            self.player_wins += 1
        else:
            outcome = RoundOutcome.LOSS
            self.opponent_wins += 1

        level_ups = self.player.apply_round_reward(outcome) if self.player else []

        result = RoundResult(
            round=self.rounds_played + 1,
            player_card=player_card,
            opponent_card=opponent_card,
            outcome=outcome,
            battle=battle,
            player_wins=self.player_wins,
            opponent_wins=self.opponent_wins,
            level_ups=level_ups,
        )
        self.rounds.append(result)
        logger.debug(f"Round {result.round}: {player_card} vs {opponent_card} -> {outcome}")

        if not self.player_hand:
            self._complete()
        return result

    def _complete(self) -> None:
        self.state = MatchState.COMPLETED
        self._summary = MatchSummary(
            outcome=self.outcome(),
            player_wins=self.player_wins,
            opponent_wins=self.opponent_wins,
            rating_delta=self.rating_delta,
        )
        if self.player:
            self.player.add_rating(self.rating_delta)
            logger.info(
                f"{self.player.username} finished a match {self.player_wins}-{self.opponent_wins}, "
                f"rating {self.rating_delta:+d} -> {self.player.rating}"
            )

    def summary(self) -> MatchSummary:
        if self._summary is None:
            msg = "Match is not completed yet"
            raise MatchNotInProgressError(msg)
        return self._summary

    def score(self) -> MatchScore:
        return MatchScore(
            state=self.state,
            player_wins=self.player_wins,
            opponent_wins=self.opponent_wins,
            rounds_played=self.rounds_played,
            rounds_left=len(self.player_hand),
        )

    def hand(self) -> MatchHand:
        return MatchHand(
            state=self.state,
            player_hand=list(self.player_hand),
            opponent_cards_left=len(self.opponent_hand),
        )
