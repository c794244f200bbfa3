# teamgen/config/settings.py

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    OPTIMAL_GROUP_SIZE: int = 3
    PREFER_SMALLER_GROUPS: bool = False
    MAX_RESHUFFLES: int = 1000
    RANDOM_SEED: Optional[int] = None

    class Config:
        env_file = ".env"
        env_prefix = "TEAMGEN_"
        extra = "ignore"

settings = Settings()
