from datetime import datetime

import sqlmodel

from app.utils.misc import get_utc_now

from ._base import BaseModel


class MatchRecord(BaseModel, table=True):
    """Immutable result of a completed match."""

    __tablename__: str = "match_records"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    username: str = sqlmodel.Field(foreign_key="players.username", index=True, max_length=100)
    opponent_label: str = sqlmodel.Field(max_length=100)
    wins: int = sqlmodel.Field(ge=0)
    losses: int = sqlmodel.Field(ge=0)
    played_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, index=True, sa_type=sqlmodel.DateTime(timezone=True)
    )
