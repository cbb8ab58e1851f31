from functools import lru_cache
from pydantic import PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DATABASE_URL: str = "sqlite:///./workout_tracker.db"

    # Workout behaviour
    REST_TIMER_DURATION: PositiveInt = 75     # seconds between sets
    WEIGHT_INCREMENT: PositiveFloat = 5.0     # step for progression suggestions
    SEED_CATALOG: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

@lru_cache
def get_settings() -> Settings:
    return Settings()
