import sqlmodel

from app.core.enums import Attribute, CardCategory, Rarity

from ._base import BaseModel


class OwnedCard(BaseModel, table=True):
    """Append-only log of every card a player has drawn.

    Owning the same template twice produces two rows with possibly different power.
    """

    __tablename__: str = "owned_cards"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    username: str = sqlmodel.Field(foreign_key="players.username", index=True, max_length=100)
    name: str = sqlmodel.Field(max_length=100)
    attribute: Attribute
    rarity: Rarity
    category: CardCategory
    description: str
    base_power: int
