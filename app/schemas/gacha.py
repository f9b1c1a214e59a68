from pydantic import BaseModel, Field

from app.schemas.card import Card


class DrawRequest(BaseModel):
    count: int = Field(default=1, ge=0, le=100, description="Number of cards to draw")


class DrawResponse(BaseModel):
    cards: list[Card]
    cost: int
    remaining_currency: int
    persisted: bool = True
    """False when the durable write failed; the in-memory result still stands"""


class ClearCardsResponse(BaseModel):
    removed: int
    persisted: bool = True
