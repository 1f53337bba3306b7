from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment overrides for the aggregation policy (``ENGINE_`` prefix)."""
    model_config = SettingsConfigDict(
        env_file='.env', env_file_encoding='utf-8', env_prefix='ENGINE_', extra='ignore'
    )

    LOG_LEVEL: str = "INFO"

    DEDUP_WINDOW_SECONDS: float = 60.0
    DECAY_RATE: float = 1.0
    OVERRIDE_BOOST: float = 1.25
    MAX_BOOSTED_RECENCY: float = 1.5
    CONFLICT_RATIO: float = 0.25
    CONFLICT_PENALTY: float = 0.3
    MAJORITY_THRESHOLD: float = 0.5

    BATCH_MAX_CONCURRENCY: int = 8
    STRICT_INVARIANTS: bool = True


settings = Settings()
