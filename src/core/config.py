"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

UploadDurationMode = Literal["elapsed", "zero", "audio_length"]


class Settings(BaseSettings):
    """ReciteScribe settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        api_base_url: Base URL of the transcription / check-in service.
        status_poll_interval: Seconds between two status requests.
        upload_duration_mode: How an uploaded file contributes to the
            recitation duration ("elapsed", "zero" or "audio_length").
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Remote service ---
    api_base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0  # status and check-in calls
    transcribe_timeout: float = 120.0  # audio upload can be slow

    # --- Status polling ---
    status_poll_interval: float = 5.0

    # --- Recitation duration ---
    # "elapsed": seconds between upload and transcribe (same as recordings)
    # "zero": uploads never count as a recitation
    # "audio_length": length of the uploaded audio file
    upload_duration_mode: UploadDurationMode = "elapsed"

    # --- Application ---
    log_level: str = "INFO"  # Python logging level


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
