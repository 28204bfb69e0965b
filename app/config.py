from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./swipe_match.db"
    APP_NAME: str = "Swipe Match API"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Match storage settings
    MATCH_STORAGE_KEY: str = "tinder-matches"
    MATCH_STORAGE_VERSION: int = 1
    MAX_MATCHES: int = 1000
    SAVE_DEBOUNCE_MS: int = 200
    MAX_MESSAGE_LENGTH: int = 1000

    # Simulated latency (milliseconds)
    INTERACTION_DELAY_MS: int = 200
    PROFILES_DELAY_MS: int = 300

    # Base URL used by the swipe API client
    API_BASE_URL: str = "http://localhost:8000/api/v1"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
