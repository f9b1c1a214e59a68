from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from app.core.enums import Attribute, CardCategory, Rarity


class CardTemplate(BaseModel):
    """Catalog entry describing a drawable card, without a power roll."""

    model_config = ConfigDict(frozen=True)

    name: str
    attribute: Attribute
    rarity: Rarity
    category: CardCategory
    description: str
    image_path: str


def _template(
    name: str, attribute: Attribute, rarity: Rarity, category: CardCategory, description: str
) -> CardTemplate:
    slug = name.lower().replace("-", "_").replace(" ", "_")
    return CardTemplate(
        name=name,
        attribute=attribute,
        rarity=rarity,
        category=category,
        description=description,
        image_path=f"resources/images/{slug}.png",
    )


FIRE, WATER, GRASS = Attribute.FIRE, Attribute.WATER, Attribute.GRASS
SSR, SR, R = Rarity.SSR, Rarity.SR, Rarity.R
BEAST, WARRIOR, NATURE = CardCategory.BEAST, CardCategory.WARRIOR, CardCategory.NATURE
MAGE, ELEMENTAL, GOLEM = CardCategory.MAGE, CardCategory.ELEMENTAL, CardCategory.GOLEM

DEFAULT_TEMPLATES: tuple[CardTemplate, ...] = (
    # Fire
    _template("Blaze Hound", FIRE, R, BEAST, "A fast-burning canine, agile but fragile."),
    _template("Flame Hedgehog", FIRE, R, BEAST, "Defensive spiker that retaliates when hit."),
    _template("Ember Archer", FIRE, SR, WARRIOR, "Fires burning arrows from long range."),
    _template("Lava Beetle", FIRE, SR, NATURE, "Molten body grants high resistance."),
    _template("Flame Dancer", FIRE, SR, MAGE, "Twirls through the battlefield, evasive."),
    _template("Inferno Dragon", FIRE, SSR, BEAST, "Dominant fire-breather, area burn skill."),
    _template("Hellfire Knight", FIRE, SSR, WARRIOR, "Rides a fire beast, blends strength & magic."),  # noqa: E501
    _template("Solar Fox", FIRE, SR, BEAST, "Quick-strike card with bonus crit chance."),
    _template("Magma Golem", FIRE, R, GOLEM, "Slow but incredibly hard to destroy."),
    _template("Ash Phoenix", FIRE, SSR, ELEMENTAL, "Mythical rebirth card, powerful late-game."),
    # Grass
    _template("Mossback Turtle", GRASS, R, BEAST, "Tanky turtle with regeneration abilities."),
    _template("Leaf Pixie", GRASS, R, MAGE, "Disruptive support unit, specializes in CC."),
    _template("Vine Hunter", GRASS, SR, WARRIOR, "Archer who tracks with entangling vines."),
    _template("Boomshroom", GRASS, SR, NATURE, "Explodes on attack, high-risk card."),
    _template("Thorn Witch", GRASS, SR, MAGE, "Specializes in poison and control."),
    _template("Shadow Leopard", GRASS, SSR, BEAST, "Stealthy predator, double strike ability."),
    _template("Glimmerhorn King", GRASS, SSR, BEAST, "King of the field, inspires other cards."),
    _template("Spirit of Forest", GRASS, SSR, ELEMENTAL, "Legendary support card, heals over time."),  # noqa: E501
    _template("Petal Guardian", GRASS, R, WARRIOR, "Defensive shield unit, ideal for stalling."),
    _template("Prairie Windwolf", GRASS, SR, BEAST, "Breaks through defense with speed."),
    # Water
    _template("Bubble Tardigrade", WATER, R, BEAST, "Cute yet resilient, restores minor HP."),
    _template("Tide Ninja", WATER, R, WARRIOR, "High dodge rate, fast assassin."),
    _template("Ice-scaled Murloc", WATER, SR, BEAST, "Blocks incoming attacks, counter-ready."),
    _template("Aqua Sorcerer", WATER, SR, MAGE, "Area caster, slows enemy cards."),
    _template("Abyssal Tentacle", WATER, SR, NATURE, "Disrupts and binds opponents in place."),
    _template("Frost Giant", WATER, SSR, ELEMENTAL, "Slows enemies and freezes the battlefield."),
    _template("Sea King Knight", WATER, SSR, WARRIOR, "Leads aquatic troops, aggressive leader."),
    _template("Snowfang Lynx", WATER, SR, BEAST, "Fast striker with high crit potential."),
    _template("Mystic Codex", WATER, R, MAGE, "Autonomous water spellcaster."),
    _template("Tidal Leviathan", WATER, SSR, BEAST, "Devastating waterquake attack, hard to beat."),
)


class CardCatalog:
    """Read-only set of card templates indexed by (attribute, rarity)."""

    def __init__(self, templates: Iterable[CardTemplate] = DEFAULT_TEMPLATES) -> None:
        self._templates = tuple(templates)
        if not self._templates:
            msg = "A card catalog needs at least one template"
            raise ValueError(msg)

        self._by_pair: dict[tuple[Attribute, Rarity], tuple[CardTemplate, ...]] = {}
        self._by_rarity: dict[Rarity, tuple[CardTemplate, ...]] = {}
        for rarity in Rarity:
            self._by_rarity[rarity] = tuple(t for t in self._templates if t.rarity is rarity)
            for attribute in Attribute:
                self._by_pair[attribute, rarity] = tuple(
                    t for t in self._by_rarity[rarity] if t.attribute is attribute
                )

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def templates(self) -> Sequence[CardTemplate]:
        return self._templates

    def templates_for(self, attribute: Attribute, rarity: Rarity) -> Sequence[CardTemplate]:
        return self._by_pair[attribute, rarity]

    def templates_of_rarity(self, rarity: Rarity) -> Sequence[CardTemplate]:
        return self._by_rarity[rarity]

    def missing_pairs(self) -> list[tuple[Attribute, Rarity]]:
        """(attribute, rarity) pairs that draws can only fill through fallback."""
        return [pair for pair, templates in self._by_pair.items() if not templates]
