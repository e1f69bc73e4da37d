"""Process settings, read from the environment and an optional .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # === Venue ===
    MARKET_ADDRESS: str = "0x5661e7bc2403c7cc08df539e4a8e2972ec256d11"  # maker market contract

    # === Matcher ===
    MATCHER_REFRESH_SECONDS: float = 60.0
    MATCHER_THRESHOLD: int = 30000  # minimum margin per twin, smallest token unit
    MATCHER_SIZING: str = "max"  # "max" or "min"
    MATCHER_ORIENTATION: str = "first_seen"  # "first_seen" or "lexicographic"

    # === Paper venue ===
    PAPER_SNAPSHOT_PATH: str = "data/snapshot.json"
    PAPER_TWIN_COST: int = 0

    # === Logging ===
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env"}


settings = Settings()
