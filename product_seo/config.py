import os
from functools import lru_cache

from dotenv import load_dotenv

# .env aus dem Projektroot laden (wenn vorhanden)
load_dotenv()


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Server
    AI_SERVICE_HOST: str = os.getenv("AI_SERVICE_HOST", "0.0.0.0")
    AI_SERVICE_PORT: int = int(os.getenv("AI_SERVICE_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")

    # Gemini
    API_KEY: str = (os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY") or "").strip()
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip()
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    REQUEST_TIMEOUT_SEC: float = float(os.getenv("REQUEST_TIMEOUT_SEC", "60"))

    # Debug
    DEBUG_AI: bool = _flag("DEBUG_AI")
    DEBUG_AI_MAX_CHARS: int = int(os.getenv("DEBUG_AI_MAX_CHARS", "2000"))

    def has_api_key(self) -> bool:
        return bool(self.API_KEY)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
