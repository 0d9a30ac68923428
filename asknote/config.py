"""Runtime settings read from the environment."""
import os

from pydantic import BaseModel, Field, field_validator


DEFAULT_CHAT_MODEL = "gemini-2.5-flash"


class Settings(BaseModel):
    """Model and transport settings for the answering pipeline."""
    google_api_key: str | None = None
    chat_model: str = DEFAULT_CHAT_MODEL
    answer_temperature: float = 0.7
    tone_temperature: float = 0.2
    request_timeout_seconds: float = 60.0
    max_retries: int = Field(default=1, ge=0)
    tone_routing: bool = False

    @field_validator('answer_temperature', 'tone_temperature')
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Ensure temperature is within the range the API accepts."""
        if not 0.0 <= v <= 2.0:
            raise ValueError('temperature must be between 0.0 and 2.0')
        return v

    @field_validator('request_timeout_seconds')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('request_timeout_seconds must be positive')
        return v


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Recognised variables:
        GOOGLE_API_KEY, CHAT_MODEL, ASKNOTE_ANSWER_TEMPERATURE,
        ASKNOTE_TONE_TEMPERATURE, ASKNOTE_REQUEST_TIMEOUT,
        ASKNOTE_MAX_RETRIES, ASKNOTE_TONE_ROUTING
    """
    values = {
        "google_api_key": os.getenv("GOOGLE_API_KEY"),
        "chat_model": os.getenv("CHAT_MODEL"),
        "answer_temperature": os.getenv("ASKNOTE_ANSWER_TEMPERATURE"),
        "tone_temperature": os.getenv("ASKNOTE_TONE_TEMPERATURE"),
        "request_timeout_seconds": os.getenv("ASKNOTE_REQUEST_TIMEOUT"),
        "max_retries": os.getenv("ASKNOTE_MAX_RETRIES"),
        "tone_routing": os.getenv("ASKNOTE_TONE_ROUTING"),
    }
    # Unset variables fall back to model defaults
    return Settings(**{k: v for k, v in values.items() if v is not None and v != ""})
