from collections.abc import Callable

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.enums import MatchOutcome, MatchState, RoundOutcome
from app.core.exceptions import (
    InsufficientFundsError,
    InvalidHandError,
    InvalidRoundIndexError,
    MatchNotInProgressError,
)
from app.engine.draw import DrawEngine
from app.schemas.card import Card
from app.schemas.match import MatchSummary, StartMatchRequest
from app.services.gacha import GachaService
from app.services.match import MatchService
from app.services.player import PlayerService
from app.services.session import SessionRegistry

CardFactory = Callable[..., Card]


def build_match_service(
    db: AsyncSession, registry: SessionRegistry, engine: DrawEngine
) -> MatchService:
    return MatchService(GachaService(db, registry, engine))


async def test_end_to_end_scenario(
    db: AsyncSession,
    registry: SessionRegistry,
    player_service: PlayerService,
    make_card: CardFactory,
    scripted_engine: type[DrawEngine],
) -> None:
    player_cards = [make_card(10) for _ in range(7)] + [make_card(5)] + [make_card(3)] * 2
    opponent_cards = [make_card(3) for _ in range(7)] + [make_card(5)] + [make_card(10)] * 2
    service = build_match_service(db, registry, scripted_engine(player_cards, opponent_cards))

    drawn = await service.gacha.draw("alice", 10)
    assert drawn.remaining_currency == 900
    assert len(await player_service.get_owned_cards("alice")) == 10

    started = await service.start_match("alice", StartMatchRequest(card_indices=list(range(10))))
    assert started.cost == 0
    assert started.hand.state is MatchState.IN_PROGRESS
    assert started.hand.player_hand == player_cards

    responses = [await service.play_round("alice", 0) for _ in range(10)]

    outcomes = [r.round.outcome for r in responses]
    assert outcomes.count(RoundOutcome.WIN) == 7
    assert outcomes.count(RoundOutcome.DRAW) == 1
    assert outcomes.count(RoundOutcome.LOSS) == 2
    assert all(r.summary is None for r in responses[:-1])
    assert responses[-1].summary == MatchSummary(
        outcome=MatchOutcome.PLAYER, player_wins=7, opponent_wins=2, rating_delta=5
    )

    stored = await player_service.get_player("alice")
    assert stored is not None
    assert stored.rating == 1005
    assert stored.experience == 72
    assert stored.currency == 900 + 36
    assert stored.level == 1

    records, _ = await player_service.get_match_records("alice", page=1, page_size=10)
    assert [(r.opponent_label, r.wins, r.losses) for r in records] == [("Computer", 7, 2)]

    outcome = await service.get_outcome("alice")
    assert outcome.rating_delta == 5


async def test_start_from_fresh_batch_charges_and_collects(
    match_service: MatchService, player_service: PlayerService
) -> None:
    started = await match_service.start_match("alice", StartMatchRequest(count=5))

    assert started.cost == 50
    assert started.remaining_currency == 950
    assert len(started.hand.player_hand) == 5
    assert started.hand.opponent_cards_left == 5
    assert len(await player_service.get_owned_cards("alice")) == 5


async def test_start_without_funds_leaves_no_match(
    match_service: MatchService, registry: SessionRegistry, player_service: PlayerService
) -> None:
    await match_service.gacha.draw("alice", 1)

    with pytest.raises(InsufficientFundsError):
        await match_service.start_match("alice", StartMatchRequest(count=100))

    session = await registry.get("alice", player_service)
    assert session.match is None
    assert session.progress.currency == 990
    assert len(session.progress.owned_cards) == 1


@pytest.mark.parametrize("indices", [[0, 0], [5], [-1]])
async def test_start_rejects_bad_selection(
    match_service: MatchService, indices: list[int]
) -> None:
    await match_service.gacha.draw("alice", 2)
    with pytest.raises(InvalidHandError):
        await match_service.start_match("alice", StartMatchRequest(card_indices=indices))


async def test_selection_keeps_cards_in_collection(
    match_service: MatchService, registry: SessionRegistry, player_service: PlayerService
) -> None:
    drawn = await match_service.gacha.draw("alice", 3)

    started = await match_service.start_match("alice", StartMatchRequest(card_indices=[2, 0]))

    assert started.hand.player_hand == [drawn.cards[2], drawn.cards[0]]
    session = await registry.get("alice", player_service)
    assert len(session.progress.owned_cards) == 3


async def test_invalid_round_index(match_service: MatchService) -> None:
    await match_service.start_match("alice", StartMatchRequest(count=2))

    with pytest.raises(InvalidRoundIndexError):
        await match_service.play_round("alice", 2)

    score = await match_service.get_score("alice")
    assert (score.rounds_played, score.rounds_left) == (0, 2)


async def test_queries_without_match(match_service: MatchService) -> None:
    with pytest.raises(MatchNotInProgressError):
        await match_service.get_hand("alice")
    with pytest.raises(MatchNotInProgressError):
        await match_service.play_round("alice", 0)


async def test_outcome_before_completion(match_service: MatchService) -> None:
    await match_service.start_match("alice", StartMatchRequest(count=2))
    await match_service.play_round("alice", 0)
    with pytest.raises(MatchNotInProgressError):
        await match_service.get_outcome("alice")


async def test_new_match_replaces_open_one(
    match_service: MatchService, player_service: PlayerService
) -> None:
    await match_service.start_match("alice", StartMatchRequest(count=3))
    await match_service.play_round("alice", 0)

    await match_service.start_match("alice", StartMatchRequest(count=2))

    score = await match_service.get_score("alice")
    assert (score.rounds_played, score.rounds_left) == (0, 2)
    records, _ = await player_service.get_match_records("alice", page=1, page_size=10)
    assert records == []


async def test_round_persistence_failure_is_reported(
    match_service: MatchService,
    registry: SessionRegistry,
    player_service: PlayerService,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    await match_service.start_match("alice", StartMatchRequest(count=1))
    rating_before = (await registry.get("alice", player_service)).progress.rating

    async def failing_record(*args: object, **kwargs: object) -> None:
        msg = "INSERT failed"
        raise OperationalError(msg, {}, Exception("database is locked"))

    monkeypatch.setattr(match_service.players, "add_match_record", failing_record)

    response = await match_service.play_round("alice", 0)

    assert not response.persisted
    assert response.summary is not None
    session = await registry.get("alice", player_service)
    assert session.progress.rating == rating_before + response.summary.rating_delta
    assert (await match_service.get_score("alice")).state is MatchState.COMPLETED
