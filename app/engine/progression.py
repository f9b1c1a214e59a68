from typing import NamedTuple

from loguru import logger
from pydantic import BaseModel, Field

from app.core.enums import RoundOutcome
from app.core.exceptions import InsufficientFundsError
from app.schemas.card import Card

XP_PER_LEVEL = 100
LEVEL_UP_BONUS_PER_LEVEL = 50

DEFAULT_LEVEL = 1
DEFAULT_CURRENCY = 1000
DEFAULT_RATING = 1000


class RoundReward(NamedTuple):
    experience: int
    currency: int


ROUND_REWARDS: dict[RoundOutcome, RoundReward] = {
    RoundOutcome.WIN: RoundReward(experience=10, currency=5),
    RoundOutcome.DRAW: RoundReward(experience=2, currency=1),
    RoundOutcome.LOSS: RoundReward(experience=0, currency=0),
}


def xp_to_next_level(level: int) -> int:
    return XP_PER_LEVEL * level


def level_up_bonus(new_level: int) -> int:
    return LEVEL_UP_BONUS_PER_LEVEL * new_level


class PlayerProgress(BaseModel):
    """In-memory, authoritative state of one player for the current session."""

    username: str
    level: int = Field(default=DEFAULT_LEVEL, ge=1)
    experience: int = Field(default=0, ge=0)
    currency: int = Field(default=DEFAULT_CURRENCY, ge=0)
    rating: int = DEFAULT_RATING
    owned_cards: list[Card] = Field(default_factory=list)

    @property
    def xp_to_next_level(self) -> int:
        return xp_to_next_level(self.level)

    def add_experience(self, amount: int) -> list[int]:
        """Add experience and apply every level-up it pays for.

        Returns:
            The levels reached, in order. Each one also granted its currency bonus.
        """
        if amount < 0:
            msg = f"Experience amount must be non-negative, got {amount}"
            raise ValueError(msg)

        self.experience += amount
        reached: list[int] = []
        while self.experience >= self.xp_to_next_level:
            self.experience -= self.xp_to_next_level
            self.level += 1
            self.currency += level_up_bonus(self.level)
            reached.append(self.level)

        for level in reached:
            logger.info(f"{self.username} leveled up to level {level}")
        return reached

    def add_currency(self, amount: int) -> None:
        if amount < 0:
            msg = f"Currency amount must be non-negative, got {amount}"
            raise ValueError(msg)
        self.currency += amount

    def spend_currency(self, amount: int) -> None:
        """Deduct ``amount`` in full, or raise without touching the balance."""
        if amount < 0:
            msg = f"Currency amount must be non-negative, got {amount}"
            raise ValueError(msg)
        if self.currency < amount:
            raise InsufficientFundsError(required=amount, available=self.currency)
        self.currency -= amount

    def add_rating(self, delta: int) -> None:
        self.rating += delta

    def apply_round_reward(self, outcome: RoundOutcome) -> list[int]:
        reward = ROUND_REWARDS[outcome]
        self.currency += reward.currency
        return self.add_experience(reward.experience)
