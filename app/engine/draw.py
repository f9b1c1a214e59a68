import random

from loguru import logger

from app.core.enums import RARITY_ROLL_ORDER, Attribute, Rarity
from app.engine.catalog import CardCatalog, CardTemplate
from app.engine.progression import PlayerProgress
from app.schemas.card import Card

ROLL_MAX = 100


class DrawEngine:
    """Weighted random card generator.

    All randomness comes from the injected ``rng`` so a seeded instance
    reproduces the same sequence of cards.
    """

    def __init__(self, catalog: CardCatalog, rng: random.Random | None = None) -> None:
        self.catalog = catalog
        self.rng = rng or random.Random()

    def roll_rarity(self) -> Rarity:
        roll = self.rng.randint(1, ROLL_MAX)
        threshold = 0
        for rarity in RARITY_ROLL_ORDER:
            threshold += rarity.weight
            if roll <= threshold:
                return rarity
        return RARITY_ROLL_ORDER[-1]

    def roll_attribute(self) -> Attribute:
        return self.rng.choice(list(Attribute))

    def roll_power(self, rarity: Rarity) -> int:
        return self.rng.randint(rarity.min_power, rarity.max_power)

    def pick_template(self, attribute: Attribute, rarity: Rarity) -> CardTemplate:
        """Pick a template for the pair, broadening to the rarity and then to anything."""
        pool = self.catalog.templates_for(attribute, rarity)
        if not pool:
            pool = self.catalog.templates_of_rarity(rarity)
        if not pool:
            pool = self.catalog.templates
        return self.rng.choice(pool)

    def generate_card(self) -> Card:
        rarity = self.roll_rarity()
        attribute = self.roll_attribute()
        template = self.pick_template(attribute, rarity)
        # The rolled attribute wins over the template's own when the search was broadened
        card = Card(
            name=template.name,
            attribute=attribute,
            rarity=rarity,
            category=template.category,
            description=template.description,
            base_power=self.roll_power(rarity),
        )
        logger.debug(f"Generated card {card}")
        return card

    def generate(self, count: int) -> list[Card]:
        """Generate cards without any currency check, e.g. for an opponent hand."""
        if count < 0:
            msg = f"Card count must be non-negative, got {count}"
            raise ValueError(msg)
        return [self.generate_card() for _ in range(count)]

    def draw(self, count: int, cost_per_card: int, payer: PlayerProgress) -> list[Card]:
        """Charge ``payer`` for ``count`` cards and add them to their collection.

        Raises:
            InsufficientFundsError: If the payer cannot afford all of them.
                Nothing is charged and no card is generated.
        """
        if count < 0 or cost_per_card < 0:
            msg = f"Count and cost must be non-negative, got {count} x {cost_per_card}"
            raise ValueError(msg)

        total_cost = count * cost_per_card
        payer.spend_currency(total_cost)

        cards = self.generate(count)
        payer.owned_cards.extend(cards)
        logger.info(
            f"{payer.username} drew {count} card(s) for {total_cost}, "
            f"{payer.currency} currency left"
        )
        return cards
