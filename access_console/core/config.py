from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Optional, List

PACKAGE_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    PROJECT_NAME: str = "Access Console"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    # Upstream application/menu/permission service. When unset the bundled
    # fixture catalog is served instead.
    CATALOG_API_URL: Optional[str] = None
    CATALOG_API_TOKEN: Optional[str] = None
    CATALOG_TIMEOUT_SECONDS: float = 10.0
    CATALOG_FIXTURE_PATH: str = str(PACKAGE_DIR / "data" / "catalog.json")

    SELECTION_PREVIEW_LIMIT: int = 3

    class Config:
        env_file = ".env"

settings = Settings()
