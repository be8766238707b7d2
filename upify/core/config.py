from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    UPIFY_API_BASE: str | None = None
    ORDER_PLACE_PATH: str = "/v1/order/place"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    NOTIFICATION_TTL_SECONDS: float = 4.5

    # order sessions idle longer than this expire; 0 disables expiry
    SESSION_IDLE_TTL_SECONDS: float = 1800.0
    # 0 disables the cap
    MAX_SESSIONS: int = 1000

    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SERVICES_TABLE: str = "services"

    # dev/local catalog when Supabase is not configured
    CATALOG_JSON_PATH: str | None = None

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
