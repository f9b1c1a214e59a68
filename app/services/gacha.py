import random
from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.engine.catalog import CardCatalog
from app.engine.draw import DrawEngine
from app.engine.progression import PlayerProgress
from app.schemas.card import Card
from app.schemas.gacha import ClearCardsResponse, DrawResponse
from app.services.player import PlayerService
from app.services.session import SessionRegistry, get_session_registry

draw_engine = DrawEngine(CardCatalog(), random.Random(settings.rng_seed))


def get_draw_engine() -> DrawEngine:
    return draw_engine


class GachaService:
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db)],
        registry: Annotated[SessionRegistry, Depends(get_session_registry)],
        engine: Annotated[DrawEngine, Depends(get_draw_engine)],
    ) -> None:
        self.db = db
        self.registry = registry
        self.engine = engine
        self.players = PlayerService(db)

    async def draw(self, username: str, count: int) -> DrawResponse:
        """Draw ``count`` cards for a player at the configured cost per card.

        Raises:
            InsufficientFundsError: If the player cannot pay for every card.
        """
        session = await self.registry.get(username, self.players)
        async with session.lock:
            cards = self.engine.draw(count, settings.draw_cost, session.progress)
            persisted = await self.persist_draw(session.progress, cards)

        return DrawResponse(
            cards=cards,
            cost=count * settings.draw_cost,
            remaining_currency=session.progress.currency,
            persisted=persisted,
        )

    async def persist_draw(self, progress: PlayerProgress, cards: Sequence[Card]) -> bool:
        """Write the debited balance and the new cards. Returns False if storage failed."""
        if not cards:
            return True

        try:
            await self.players.save_stats(progress)
            await self.players.add_owned_cards(progress.username, cards)
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception(
                f"Failed to persist draw of {len(cards)} card(s) for {progress.username}"
            )
            return False
        return True

    async def clear_collection(self, username: str) -> ClearCardsResponse:
        """Empty a player's owned-card collection, in memory first and then in storage."""
        session = await self.registry.get(username, self.players)
        async with session.lock:
            removed = len(session.progress.owned_cards)
            session.progress.owned_cards.clear()
            try:
                await self.players.clear_owned_cards(username)
            except SQLAlchemyError:
                await self.db.rollback()
                logger.exception(f"Failed to persist clearing {removed} card(s) for {username}")
                return ClearCardsResponse(removed=removed, persisted=False)

        return ClearCardsResponse(removed=removed)
