from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    omdb_api_key: str = ""  # Not validated locally, OMDB answers 401 without it
    omdb_base_url: str = "https://www.omdbapi.com/"
    omdb_timeout_seconds: float = 10.0
    storage_path: str | None = None  # Directory for persisted state; None keeps everything in memory
    token_secret: str = "change-me"  # HS256 key for session tokens
    token_ttl_seconds: int = 24 * 60 * 60
    auth_delay_seconds: float = 0.5  # Simulated round trip for login/registration
    bcrypt_rounds: int = 12
    search_ttl_seconds: int = 60 * 60
    details_ttl_seconds: int = 24 * 60 * 60
    cache_max_entries: int | None = None  # None keeps the cache unbounded

    model_config = {
        "env_file": [".env"],
        "env_prefix": "CINEFIND_",
        "extra": "ignore",
    }
