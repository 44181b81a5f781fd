# cinema_brew/config.py
import os
from dataclasses import dataclass
from typing import List

def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}

def _env_csv(name: str, default: str = "*") -> List[str]:
    raw = os.getenv(name, default)
    return [x.strip() for x in raw.split(",") if x.strip()]

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)

@dataclass(frozen=True)
class Config:
    # OpenAI
    openai_api_key: str
    openai_text_model: str
    openai_image_model: str
    storyboard_image_size: str  # gpt-image-1 landscape: 1536x1024
    text_temperature: float
    # Storyboard rendering
    image_retries: int
    image_retry_backoff_min: float  # seconds
    image_retry_backoff_max: float
    storyboard_stagger_seconds: float
    # API / CORS
    allowed_origins: List[str]
    # Persistence
    database_url: str
    bcrypt_rounds: int
    # Logging
    log_level: str
    debug_sql: bool

def load_config() -> Config:
    return Config(
        openai_api_key = os.getenv("OPENAI_API_KEY", ""),
        openai_text_model = os.getenv("OPENAI_TEXT_MODEL", "gpt-4o-mini"),
        openai_image_model = os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1"),
        storyboard_image_size = os.getenv("STORYBOARD_IMAGE_SIZE", "1536x1024"),
        text_temperature = _env_float("TEXT_TEMPERATURE", 0.7),
        image_retries = int(os.getenv("IMAGE_RETRIES", "1")),
        image_retry_backoff_min = _env_float("IMAGE_RETRY_BACKOFF_MIN", 5.0),
        image_retry_backoff_max = _env_float("IMAGE_RETRY_BACKOFF_MAX", 10.0),
        storyboard_stagger_seconds = _env_float("STORYBOARD_STAGGER_SECONDS", 1.5),
        allowed_origins = _env_csv("ALLOWED_ORIGINS", "*"),
        database_url = os.getenv("DATABASE_URL", "sqlite:///./cinema_brew.db"),
        bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "10")),
        log_level = os.getenv("LOG_LEVEL", "INFO"),
        debug_sql = _env_bool("DEBUG_SQL", False),
    )

# Load once
config = load_config()
