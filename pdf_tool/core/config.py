from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "PDF Tool"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
        "http://localhost:8000",
    ]

    # Uploads
    MAX_FILE_SIZE_BYTES: int = 50 * 1024 * 1024  # 50MB

    # External tools
    GHOSTSCRIPT_BINARY: str = "gs"
    LIBREOFFICE_BINARY: str = "soffice"
    TESSERACT_CMD: Optional[str] = None
    OCR_LANGUAGE: str = "eng"
    TOOL_TIMEOUT_SECONDS: float = 120.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
