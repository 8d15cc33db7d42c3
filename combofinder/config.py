from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="COMBOFINDER_")

    app_name: str = "Combo Finder"
    debug: bool = False

    catalog_url: str = "https://commanderspellbook.com/api/combo-data.json"
    catalog_path: Path = DATA_DIR / "combo-data.json"
    card_data_path: Path = DATA_DIR / "cards.json"

    # Strict decoding aborts on the first malformed catalog entry;
    # lenient decoding skips it and reports a partial catalog
    strict_decode: bool = True

    # Max missing requirements for a potential match (None = unbounded)
    potential_tolerance: int | None = None

    default_vendor: str = "cardkingdom"


settings = Settings()


# =============================================================================
# MATCHING LIMITS
# =============================================================================

# Decks with fewer distinct cards than this cannot form combos
MIN_DISTINCT_CARDS = 2
