# services/eligibility/app/config.py
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

PUBLIC_DIR = Path(__file__).resolve().parents[1] / "public"


class Settings(BaseSettings):
    APP_NAME: str = "Loan Eligibility Service"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Front-end bundle served for every non-API path
    STATIC_DIR: Path = PUBLIC_DIR

    ALLOWED_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    LOG_LEVEL: str = "INFO"
    MAX_BODY_BYTES: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def allowed_origins_list(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


settings = Settings()
