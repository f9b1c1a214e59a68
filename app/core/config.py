from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    db_url: str = "sqlite+aiosqlite:///./gacha.db"
    env: Literal["prod", "dev"] = "prod"
    log_level: str = "INFO"

    # Gacha
    draw_cost: int = 10
    rng_seed: int | None = None
    """Seed for the process-wide draw RNG, unset means OS entropy"""

    # New player defaults
    starting_currency: int = 1000
    starting_rating: int = 1000

    # Match
    opponent_label: str = "Computer"

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


load_dotenv()
settings = Config()
