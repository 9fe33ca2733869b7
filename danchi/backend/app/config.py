from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    DANCHI_DB_URL: str = "sqlite+aiosqlite:///./danchi.db"
    LOG_LEVEL: str = "INFO"

    # --- Minimal auth (API key) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Valuation ---
    # Used when a complex has no floor_coef_pattern of its own
    DEFAULT_FLOOR_PATTERN: str | None = None
    FLOOR_FALLBACK: str = "first"  # first|clamp
    CLAMP_BUY_TARGET: bool = False

    # --- Opportunity flags ---
    GAP_POLICY: str = "symmetric"  # symmetric|one_sided
    GAP_THRESHOLD: int = 300_000
    FAST_DAYS_THRESHOLD: int = 30
    HIGH_COEF_THRESHOLD: float = 1.05


settings = Settings()
