# med_appointments/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import List
from functools import lru_cache

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "Medical Appointments API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    # The static catch-all owns every non-API path, so docs are opt-in
    DOCS_ENABLED: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 3000))

    # Storage Settings
    DATA_FILE: Path = PROJECT_ROOT / "data" / "appointments.json"
    FRONTEND_DIR: Path = PROJECT_ROOT / "frontend"
    INDEX_DOCUMENT: str = "index.html"

    # Request Settings
    MAX_BODY_SIZE: int = 1_000_000  # bytes

    # CORS Settings (comma-separated strings to avoid JSON parsing in env)
    ALLOWED_METHODS: str = "GET,POST,OPTIONS"
    ALLOWED_HEADERS: str = "Content-Type"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_methods_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_METHODS)

    @property
    def allowed_headers_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_HEADERS)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
