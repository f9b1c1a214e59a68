from collections.abc import Iterable, Sequence
from typing import Annotated

from fastapi import Depends
from sqlmodel import col, desc, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import PlayerNotFoundError
from app.engine.progression import PlayerProgress
from app.models.match_record import MatchRecord
from app.models.owned_card import OwnedCard
from app.models.player import Player
from app.schemas.card import Card
from app.schemas.common import PaginationData
from app.schemas.player import LeaderboardEntry


class PlayerService:
    """Durable storage for player stats, owned cards and match history.

    Every write commits on its own; nothing here spans more than one call.
    """

    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def get_player(self, username: str) -> Player | None:
        result = await self.db.exec(select(Player).where(Player.username == username))
        return result.first()

    async def get_or_create_player(self, username: str) -> Player:
        player = await self.get_player(username)
        if player is None:
            player = Player(
                username=username,
                currency=settings.starting_currency,
                rating=settings.starting_rating,
            )
            self.db.add(player)
            await self.db.commit()
            await self.db.refresh(player)
        return player

    async def load_progress(self, username: str) -> PlayerProgress:
        """Load a player's stats and full collection, creating default stats if absent."""
        player = await self.get_or_create_player(username)
        return PlayerProgress(
            username=player.username,
            level=player.level,
            experience=player.experience,
            currency=player.currency,
            rating=player.rating,
            owned_cards=await self.get_owned_cards(username),
        )

    async def save_stats(self, progress: PlayerProgress) -> Player:
        """Upsert level, experience, currency and rating keyed by username."""
        stats = {
            "level": progress.level,
            "experience": progress.experience,
            "currency": progress.currency,
            "rating": progress.rating,
        }
        player = await self.get_player(progress.username)
        if player is None:
            player = Player(username=progress.username, **stats)
        else:
            player.sqlmodel_update(stats)

        self.db.add(player)
        await self.db.commit()
        await self.db.refresh(player)
        return player

    async def add_owned_cards(self, username: str, cards: Iterable[Card]) -> int:
        rows = [OwnedCard(username=username, **card.model_dump()) for card in cards]
        if not rows:
            return 0

        self.db.add_all(rows)
        await self.db.commit()
        return len(rows)

    async def add_owned_card(self, username: str, card: Card) -> None:
        await self.add_owned_cards(username, [card])

    async def get_owned_cards(self, username: str) -> list[Card]:
        result = await self.db.exec(
            select(OwnedCard).where(OwnedCard.username == username).order_by(col(OwnedCard.id))
        )
        return [
            Card(
                name=row.name,
                attribute=row.attribute,
                rarity=row.rarity,
                category=row.category,
                description=row.description,
                base_power=row.base_power,
            )
            for row in result.all()
        ]

    async def clear_owned_cards(self, username: str) -> int:
        """Remove all cards from a player's collection. Returns the number of cards removed."""
        result = await self.db.exec(select(OwnedCard).where(OwnedCard.username == username))
        owned_cards = result.all()

        count = len(owned_cards)
        for owned_card in owned_cards:
            await self.db.delete(owned_card)

        await self.db.commit()
        return count

    async def add_match_record(
        self, username: str, *, opponent_label: str, wins: int, losses: int
    ) -> MatchRecord:
        record = MatchRecord(
            username=username, opponent_label=opponent_label, wins=wins, losses=losses
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def get_match_records(
        self, username: str, *, page: int, page_size: int
    ) -> tuple[Sequence[MatchRecord], PaginationData]:
        if await self.get_player(username) is None:
            raise PlayerNotFoundError(username)

        offset = (page - 1) * page_size

        total_items_result = await self.db.exec(
            select(func.count(col(MatchRecord.id))).where(MatchRecord.username == username)
        )
        total_items = total_items_result.one()

        total_pages = (total_items + page_size - 1) // page_size

        result = await self.db.exec(
            select(MatchRecord)
            .where(MatchRecord.username == username)
            .order_by(desc(col(MatchRecord.played_at)), desc(col(MatchRecord.id)))
            .offset(offset)
            .limit(page_size)
        )
        records = result.all()

        pagination = PaginationData(
            page=page, page_size=page_size, total_items=total_items, total_pages=total_pages
        )

        return records, pagination

    async def get_leaderboard(self, limit: int = 100) -> list[LeaderboardEntry]:
        """Players sorted by rating desc, then level desc, then username."""
        result = await self.db.exec(
            select(Player)
            .order_by(desc(col(Player.rating)), desc(col(Player.level)), col(Player.username))
            .limit(limit)
        )
        return [
            LeaderboardEntry(
                rank=idx + 1, username=player.username, level=player.level, rating=player.rating
            )
            for idx, player in enumerate(result.all())
        ]
