from enum import StrEnum


class Attribute(StrEnum):
    """Elemental attribute. FIRE beats GRASS, GRASS beats WATER, WATER beats FIRE."""

    FIRE = "FIRE"
    WATER = "WATER"
    GRASS = "GRASS"

    def beats(self, other: "Attribute") -> bool:
        return DOMINANCE[self] is other


DOMINANCE: dict[Attribute, Attribute] = {
    Attribute.FIRE: Attribute.GRASS,
    Attribute.GRASS: Attribute.WATER,
    Attribute.WATER: Attribute.FIRE,
}
"""Each attribute mapped to the single attribute it dominates."""


class Rarity(StrEnum):
    SSR = "SSR"
    SR = "SR"
    R = "R"

    @property
    def weight(self) -> int:
        return RARITY_STATS[self][0]

    @property
    def min_power(self) -> int:
        return RARITY_STATS[self][1]

    @property
    def max_power(self) -> int:
        return RARITY_STATS[self][2]


# rarity -> (draw weight out of 100, min power, max power)
RARITY_STATS: dict[Rarity, tuple[int, int, int]] = {
    Rarity.SSR: (10, 9, 10),
    Rarity.SR: (30, 6, 8),
    Rarity.R: (60, 3, 5),
}
RARITY_ROLL_ORDER = (Rarity.SSR, Rarity.SR, Rarity.R)
"""Order in which cumulative weight ranges are laid over a 1..100 roll."""


class CardCategory(StrEnum):
    BEAST = "BEAST"
    WARRIOR = "WARRIOR"
    NATURE = "NATURE"
    MAGE = "MAGE"
    ELEMENTAL = "ELEMENTAL"
    GOLEM = "GOLEM"


class MatchState(StrEnum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class RoundOutcome(StrEnum):
    """Round result from the player's point of view."""

    WIN = "WIN"
    LOSS = "LOSS"
    DRAW = "DRAW"


class MatchOutcome(StrEnum):
    PLAYER = "PLAYER"
    OPPONENT = "OPPONENT"
    DRAW = "DRAW"
