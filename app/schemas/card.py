from pydantic import BaseModel, ConfigDict

from app.core.enums import Attribute, CardCategory, Rarity


class Card(BaseModel):
    """A concrete card with its power rolled once at creation time.

    Cards carry no identity beyond their field values.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    attribute: Attribute
    rarity: Rarity
    category: CardCategory
    description: str
    base_power: int

    def __str__(self) -> str:
        return f"{self.name} [{self.attribute}/{self.rarity}] {self.base_power}"
