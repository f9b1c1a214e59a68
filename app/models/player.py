import sqlmodel

from ._base import BaseModel


class Player(BaseModel, table=True):
    """Durable stats of a player, one row per account."""

    __tablename__: str = "players"

    username: str = sqlmodel.Field(primary_key=True, index=True, max_length=100)
    level: int = sqlmodel.Field(default=1, ge=1)
    experience: int = sqlmodel.Field(default=0, ge=0)
    currency: int = sqlmodel.Field(default=0, ge=0)
    rating: int = 1000
    """Signed, unbounded competitive rating"""
