import random
from collections.abc import AsyncGenerator, Callable, Sequence

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.db import get_db
from app.core.enums import Attribute, CardCategory, Rarity
from app.engine.catalog import CardCatalog
from app.engine.draw import DrawEngine
from app.main import app
from app.models import match_record, owned_card, player  # noqa: F401
from app.schemas.card import Card
from app.services.gacha import GachaService, get_draw_engine
from app.services.match import MatchService
from app.services.player import PlayerService
from app.services.session import SessionRegistry, get_session_registry

CardFactory = Callable[..., Card]


def build_card(
    power: int,
    attribute: Attribute = Attribute.FIRE,
    rarity: Rarity = Rarity.R,
    name: str = "Test Card",
) -> Card:
    return Card(
        name=name,
        attribute=attribute,
        rarity=rarity,
        category=CardCategory.BEAST,
        description="",
        base_power=power,
    )


class ScriptedDrawEngine(DrawEngine):
    """Draw engine whose generated batches are fixed up front, in call order."""

    def __init__(self, *batches: Sequence[Card]) -> None:
        super().__init__(CardCatalog(), random.Random(0))
        self.batches = [list(batch) for batch in batches]

    def generate(self, count: int) -> list[Card]:
        if count == 0:
            return []
        batch = self.batches.pop(0)
        assert len(batch) == count
        return batch


@pytest.fixture
def make_card() -> CardFactory:
    return build_card


@pytest.fixture
def draw_engine() -> DrawEngine:
    return DrawEngine(CardCatalog(), random.Random(1234))


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def player_service(db: AsyncSession) -> PlayerService:
    return PlayerService(db)


@pytest.fixture
def gacha_service(
    db: AsyncSession, registry: SessionRegistry, draw_engine: DrawEngine
) -> GachaService:
    return GachaService(db, registry, draw_engine)


@pytest.fixture
def match_service(gacha_service: GachaService) -> MatchService:
    return MatchService(gacha_service)


@pytest.fixture
async def client(
    db_engine: AsyncEngine, registry: SessionRegistry, draw_engine: DrawEngine
) -> AsyncGenerator[AsyncClient]:
    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(db_engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_draw_engine] = lambda: draw_engine

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def scripted_engine() -> type[ScriptedDrawEngine]:
    return ScriptedDrawEngine
