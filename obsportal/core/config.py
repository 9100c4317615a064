# obsportal/core/config.py

from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # REST backend that owns teachers / departments / focus areas / observations
    API_BASE_URL: str = "http://127.0.0.1:8000"

    # None means wait for the backend as long as it takes
    REQUEST_TIMEOUT: Optional[float] = None

    # Delay before the browser goes back to the list after a successful create
    REDIRECT_DELAY_MS: int = 800

    DATE_FORMAT: str = "%d/%m/%Y"

    APP_TITLE: str = "Classroom Observations"

    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "OBSPORTAL_"
        case_sensitive = False


CONFIG = Settings()
