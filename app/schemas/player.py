from pydantic import BaseModel


class PlayerStats(BaseModel):
    username: str
    level: int
    experience: int
    xp_to_next_level: int
    currency: int
    rating: int
    owned_cards: int


class LeaderboardEntry(BaseModel):
    rank: int
    username: str
    level: int
    rating: int
