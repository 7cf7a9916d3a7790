"""
Runtime configuration, read from the environment (and a local .env file).
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


# ---------------------------------------------------
# LOAD .env ONLY IN LOCAL DEVELOPMENT
# ---------------------------------------------------
# Railway sets environment variable: RAILWAY_ENVIRONMENT
if not os.getenv("RAILWAY_ENVIRONMENT"):
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


class Settings(BaseModel):
    # Groq (OpenAI-compatible chat completions)
    groq_api_key: Optional[str] = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.1-8b-instant"
    llm_timeout_seconds: float = 30.0

    # LiveKit
    livekit_url: Optional[str] = None
    livekit_api_key: Optional[str] = None
    livekit_api_secret: Optional[str] = None
    livekit_token_ttl_hours: int = 6

    # Server
    port: int = 3001
    log_level: str = "INFO"

    @property
    def livekit_configured(self) -> bool:
        return bool(self.livekit_url and self.livekit_api_key and self.livekit_api_secret)


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        groq_api_key=os.getenv("GROQ_API_KEY"),
        groq_base_url=os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
        groq_model=os.getenv("GROQ_MODEL", "llama-3.1-8b-instant"),
        llm_timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", 30)),
        livekit_url=os.getenv("LIVEKIT_URL"),
        livekit_api_key=os.getenv("LIVEKIT_API_KEY"),
        livekit_api_secret=os.getenv("LIVEKIT_API_SECRET"),
        livekit_token_ttl_hours=int(os.getenv("LIVEKIT_TOKEN_TTL_HOURS", 6)),
        port=int(os.getenv("PORT", 3001)),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
