from pydantic import BaseModel, Field, computed_field, model_validator

from app.core.enums import MatchOutcome, MatchState, RoundOutcome
from app.schemas.card import Card


class BattleResult(BaseModel):
    """Outcome of one card-vs-card comparison.

    On a draw ``winner`` and ``loser`` are None and the powers are reported
    in argument order.
    """

    winner: Card | None = None
    loser: Card | None = None
    winner_power: int
    loser_power: int

    @computed_field
    @property
    def is_draw(self) -> bool:
        return self.winner is None


class RoundResult(BaseModel):
    round: int
    player_card: Card
    opponent_card: Card
    outcome: RoundOutcome
    battle: BattleResult
    player_wins: int
    opponent_wins: int
    level_ups: list[int] = Field(default_factory=list)


class MatchScore(BaseModel):
    state: MatchState
    player_wins: int
    opponent_wins: int
    rounds_played: int
    rounds_left: int


class MatchSummary(BaseModel):
    outcome: MatchOutcome
    player_wins: int
    opponent_wins: int
    rating_delta: int


class MatchHand(BaseModel):
    state: MatchState
    player_hand: list[Card]
    opponent_cards_left: int


class StartMatchRequest(BaseModel):
    """Either draw a fresh paid batch (``count``) or pick cards from the owned collection."""

    count: int | None = Field(default=None, ge=1, le=100)
    card_indices: list[int] | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_exactly_one_source(self) -> "StartMatchRequest":
        if (self.count is None) == (self.card_indices is None):
            msg = "Provide exactly one of count or card_indices"
            raise ValueError(msg)
        return self


class PlayRoundRequest(BaseModel):
    index: int = Field(description="Position of the card in the remaining player hand")


class RoundResponse(BaseModel):
    round: RoundResult
    summary: MatchSummary | None = None
    """Set when this round completed the match"""
    persisted: bool = True


class StartMatchResponse(BaseModel):
    hand: MatchHand
    cost: int
    remaining_currency: int
    persisted: bool = True
