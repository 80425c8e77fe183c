# config.py
import os
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Project-wide settings (Pydantic V2).
    Values are loaded from environment variables or a .env file, falling back to the defaults below.
    """

    # Project Info
    PROJECT_NAME: str = "Crash_Stats"
    VERSION: str = "1.0.0"

    # Storage Settings
    DATA_ROOT: str = "data"
    DATA_FILE: str = os.path.join(DATA_ROOT, "GR_Traffic_Crashes.csv")
    CSV_ENCODING: str = "utf-8"
    LOG_DIR: str = "./logs"
    LOG_LEVEL: str = "INFO"

    # Analysis Settings
    CHUNK_SIZE: int = 10000
    TOP_N_INTERSECTIONS: int = 10
    SHOW_PROGRESS: bool = True

    # .env loading
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


# Singleton
settings = Settings()

# Created at import so file sinks always have a target
os.makedirs(settings.LOG_DIR, exist_ok=True)
