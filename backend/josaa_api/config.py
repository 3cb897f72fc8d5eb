import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field
from typing import List, Optional

# backend/josaa_api/config.py -> project root
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

class Settings(BaseSettings):
    PROJECT_NAME: str = "JoSAA Seat Search"

    # Dataset
    CSV_FILE_PATH: str = "2024_data0.csv"

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGIN: str = "*"

    # Rate limiting (disabled unless RATE_LIMIT is set)
    RATE_LIMIT: Optional[int] = None
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60

    # Search defaults
    DEFAULT_TOLERANCE: float = 2.5
    DEFAULT_RESULT_CAP: int = 20

    LOG_LEVEL: str = "INFO"

    @computed_field
    @property
    def CSV_PATH(self) -> str:
        if os.path.isabs(self.CSV_FILE_PATH):
            return self.CSV_FILE_PATH
        return os.path.join(PROJECT_ROOT, self.CSV_FILE_PATH)

    @computed_field
    @property
    def CORS_ORIGINS(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGIN.split(",") if o.strip()]
        return origins or ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
