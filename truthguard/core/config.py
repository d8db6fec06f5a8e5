import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Dict
from dotenv import load_dotenv


load_dotenv()  # Load environment variables from a .env file if present

class Config(BaseSettings):
    """
    Application configuration settings.
    Reads from environment variables by default.
    """
    PROJECT_NAME: str = "TruthGuard Verification API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Lookup provider: "simulated" (demo/offline) or "tavily" (web search)
    LOOKUP_PROVIDER: str = "simulated"
    TAVILY_API_KEY: Optional[str] = os.getenv("TAVILY_API_KEY")
    TAVILY_MAX_RESULTS: int = 3

    # Simulated lookup
    SIMULATED_HIT_RATE: float = 0.6
    SIMULATED_LATENCY: float = 0.0  # seconds

    # Performance Settings
    LOOKUP_TIMEOUT: float = 10.0  # seconds, per source
    LOOKUP_RETRIES: int = 0
    CONCURRENT_LOOKUPS: bool = True
    VERIFY_TIMEOUT: float = 30.0  # seconds, per request

    # Empty list means the built-in panel of five news sites
    SOURCE_PANEL: List[Dict[str, str]] = []

    # Cache Settings
    CACHE_ENABLED: bool = False
    CACHE_TTL: int = 86400  # 24 hours in seconds
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_PREFIX: str = "truthguard"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


config = Config()
