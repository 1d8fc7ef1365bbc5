from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckPricer"
    debug: bool = False

    scryfall_api_url: str = "https://api.scryfall.com"
    catalog_user_agent: str = "DeckPricer/1.0"

    # Scryfall asks for at most 10 requests/second
    scryfall_page_delay: float = 0.1

    exchange_rate_url: str = "https://api.exchangerate-api.com/v4/latest/USD"
    default_usd_to_cad: float = 1.35

    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    store_request_timeout: float = 8.0

    # Backoff for storefront rate limiting: 1s, 2s, 4s
    retry_max_retries: int = 3
    retry_base_delay: float = 1.0
    retry_backoff_multiplier: float = 2.0

    # Pause between deck lines so storefronts don't throttle us
    deck_line_delay: float = 0.5


settings = Settings()
