from collections.abc import Sequence
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.models.match_record import MatchRecord
from app.schemas.card import Card
from app.schemas.common import APIResponse, PaginatedResponse
from app.schemas.gacha import ClearCardsResponse
from app.schemas.player import LeaderboardEntry, PlayerStats
from app.services.gacha import GachaService
from app.services.player import PlayerService
from app.services.session import SessionRegistry, get_session_registry

router = APIRouter(prefix="/players", tags=["players"])

Username = Annotated[str, Path(min_length=1, max_length=100)]


@router.get("/leaderboard")
async def get_leaderboard(
    service: Annotated[PlayerService, Depends()],
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> APIResponse[list[LeaderboardEntry]]:
    return APIResponse(data=await service.get_leaderboard(limit))


@router.get("/{username}")
async def get_player(
    username: Username,
    service: Annotated[PlayerService, Depends()],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> APIResponse[PlayerStats]:
    """Get a player's stats, creating a new player with default stats on first access."""
    session = await registry.get(username, service)
    return APIResponse(data=session.stats())


@router.get("/{username}/cards")
async def get_owned_cards(
    username: Username,
    service: Annotated[PlayerService, Depends()],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> APIResponse[list[Card]]:
    session = await registry.get(username, service)
    return APIResponse(data=list(session.progress.owned_cards))


@router.delete("/{username}/cards")
async def clear_owned_cards(
    username: Username, service: Annotated[GachaService, Depends()]
) -> APIResponse[ClearCardsResponse]:
    result = await service.clear_collection(username)
    return APIResponse(data=result, message=f"Removed {result.removed} card(s)")


@router.get("/{username}/records")
async def get_match_records(
    username: Username,
    service: Annotated[PlayerService, Depends()],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1)] = 10,
) -> PaginatedResponse[Sequence[MatchRecord]]:
    records, pagination = await service.get_match_records(
        username, page=page, page_size=page_size
    )
    return PaginatedResponse(data=records, pagination=pagination)
