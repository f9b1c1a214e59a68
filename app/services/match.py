from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.enums import MatchState
from app.core.exceptions import InvalidHandError, MatchNotInProgressError
from app.engine.match import Match
from app.engine.progression import PlayerProgress
from app.schemas.card import Card
from app.schemas.match import (
    MatchHand,
    MatchScore,
    MatchSummary,
    RoundResponse,
    StartMatchRequest,
    StartMatchResponse,
)
from app.services.gacha import GachaService
from app.services.session import GameSession


class MatchService:
    """Runs one match per player against a freshly generated opponent hand."""

    def __init__(self, gacha: Annotated[GachaService, Depends()]) -> None:
        self.gacha = gacha
        self.db = gacha.db
        self.registry = gacha.registry
        self.engine = gacha.engine
        self.players = gacha.players

    async def _get_session(self, username: str) -> GameSession:
        return await self.registry.get(username, self.players)

    @staticmethod
    def _require_match(session: GameSession) -> Match:
        if session.match is None:
            msg = "No match has been started"
            raise MatchNotInProgressError(msg)
        return session.match

    @staticmethod
    def select_cards(owned_cards: Sequence[Card], indices: Sequence[int]) -> list[Card]:
        """Pick cards from the owned collection by position, in the order given."""
        if len(set(indices)) != len(indices):
            msg = "Card indices must not repeat"
            raise InvalidHandError(msg)

        invalid = [i for i in indices if not 0 <= i < len(owned_cards)]
        if invalid:
            msg = f"Card indices {invalid} are out of range for a collection of {len(owned_cards)}"
            raise InvalidHandError(msg)

        return [owned_cards[i] for i in indices]

    async def start_match(self, username: str, request: StartMatchRequest) -> StartMatchResponse:
        """Build the player's hand and an equal-size opponent hand, replacing any open match."""
        session = await self._get_session(username)
        async with session.lock:
            progress = session.progress
            cost = 0
            drawn: list[Card] = []

            if request.count is not None:
                drawn = self.engine.draw(request.count, settings.draw_cost, progress)
                cost = request.count * settings.draw_cost
                hand = drawn
            else:
                hand = self.select_cards(progress.owned_cards, request.card_indices or [])

            match = Match(player=progress)
            match.start(hand, self.engine.generate(len(hand)))

            if session.match is not None and session.match.state is MatchState.IN_PROGRESS:
                logger.info(
                    f"{username} abandoned a match after {session.match.rounds_played} round(s)"
                )
            session.match = match

            persisted = await self.gacha.persist_draw(progress, drawn)

        return StartMatchResponse(
            hand=match.hand(), cost=cost, remaining_currency=progress.currency, persisted=persisted
        )

    async def play_round(self, username: str, index: int) -> RoundResponse:
        session = await self._get_session(username)
        async with session.lock:
            match = self._require_match(session)
            result = match.play_round(index)
            summary = match.summary() if match.state is MatchState.COMPLETED else None
            persisted = await self.persist_round(session.progress, summary)

        return RoundResponse(round=result, summary=summary, persisted=persisted)

    async def persist_round(self, progress: PlayerProgress, summary: MatchSummary | None) -> bool:
        """Write the player's stats and, for a finished match, its record."""
        try:
            await self.players.save_stats(progress)
            if summary is not None:
                await self.players.add_match_record(
                    progress.username,
                    opponent_label=settings.opponent_label,
                    wins=summary.player_wins,
                    losses=summary.opponent_wins,
                )
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception(f"Failed to persist round result for {progress.username}")
            return False
        return True

    async def get_hand(self, username: str) -> MatchHand:
        session = await self._get_session(username)
        return self._require_match(session).hand()

    async def get_score(self, username: str) -> MatchScore:
        session = await self._get_session(username)
        return self._require_match(session).score()

    async def get_outcome(self, username: str) -> MatchSummary:
        session = await self._get_session(username)
        return self._require_match(session).summary()
