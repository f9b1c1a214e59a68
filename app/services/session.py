import asyncio

from app.engine.match import Match
from app.engine.progression import PlayerProgress
from app.schemas.player import PlayerStats
from app.services.player import PlayerService


class GameSession:
    """In-memory state of one logged-in player.

    ``lock`` serializes every mutation of the player (draws, match start, rounds).
    """

    def __init__(self, progress: PlayerProgress) -> None:
        self.progress = progress
        self.match: Match | None = None
        self.lock = asyncio.Lock()

    def stats(self) -> PlayerStats:
        return PlayerStats(
            username=self.progress.username,
            level=self.progress.level,
            experience=self.progress.experience,
            xp_to_next_level=self.progress.xp_to_next_level,
            currency=self.progress.currency,
            rating=self.progress.rating,
            owned_cards=len(self.progress.owned_cards),
        )


class SessionRegistry:
    def __init__(self) -> None:
        self._sessions: dict[str, GameSession] = {}
        self._loading: dict[str, asyncio.Lock] = {}

    async def get(self, username: str, players: PlayerService) -> GameSession:
        """Return the player's session, loading it from storage on first access.

        Loads are serialized per username, so one slow load never blocks other players.
        """
        session = self._sessions.get(username)
        if session is not None:
            return session

        lock = self._loading.setdefault(username, asyncio.Lock())
        async with lock:
            session = self._sessions.get(username)
            if session is None:
                progress = await players.load_progress(username)
                session = GameSession(progress)
                self._sessions[username] = session
        self._loading.pop(username, None)
        return session


session_registry = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    return session_registry
