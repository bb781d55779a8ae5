from typing import ClassVar, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.constants.config import LLM_MODEL_NAME, PROBE_TIMEOUT_SECONDS


class Settings(BaseSettings):
    # Fact-verification backend
    BACKEND_API_URL: str = Field(
        default="https://ps03-ai-verifier.onrender.com/verify",
        description="Factual verification backend endpoint (POST {text})",
    )
    BACKEND_TIMEOUT_SECONDS: float = Field(default=60.0, description="Timeout for the backend call")

    # LLM Configuration
    GROQ_API_KEY: Optional[str] = Field(default=None)
    GROQ_BASE_URL: Optional[str] = Field(default=None, description="Override for OpenAI-compatible gateways")
    GROQ_TIMEOUT_SECONDS: float = Field(default=60.0, description="Timeout for chat completion calls")
    LLM_MODEL_NAME: str = Field(default=LLM_MODEL_NAME, description="Chat model used for AI insight/detection")

    # Citation probing / scraping
    PROBE_TIMEOUT_SECONDS: float = Field(default=PROBE_TIMEOUT_SECONDS, description="Hard cap per URL probe")
    SCRAPE_TIMEOUT_SECONDS: float = Field(default=12.0, description="Timeout for page scraping")

    # History (SQLite)
    HISTORY_ENABLED: bool = Field(default=True, description="Append verified results to history")
    HISTORY_DB_PATH: str = Field(default="history.db", description="SQLite database path for verification history")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Log level for service loggers")
    LOG_PROPAGATE: bool = Field(default=False, description="Forward records to the root logger")

    # CORS
    CORS_ORIGINS: List[str] = Field(default=["*"], description="Allowed CORS origins")

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
