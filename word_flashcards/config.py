"""Application configuration loaded from the environment and a .env file."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_APP_TITLE = "Language App"


class Settings(BaseSettings):
    """Runtime settings for the flash card session and its Word Source.

    Environment variables take precedence over values from ``.env``.

    Attributes:
        word_source_url: Base address of the Word Source (e.g. http://localhost)
        word_source_path: Path of the word endpoint below the base address
        request_timeout: Seconds to wait for the Word Source before failing
        max_repeat_retries: Extra fetches allowed when the same word comes back
        app_title: Title shown by the view
        log_level: loguru level name
        log_file: Optional log file path
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    word_source_url: str = "http://localhost"
    word_source_path: str = "/get-word.php"
    request_timeout: float = Field(default=10.0, gt=0)
    max_repeat_retries: int = Field(default=1, ge=0)
    app_title: str = DEFAULT_APP_TITLE
    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("word_source_url")
    @classmethod
    def validate_word_source_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "word_source_url cannot be empty"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("word_source_path")
    @classmethod
    def normalize_word_source_path(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance.

    The first call reads the environment; later calls return the same object.
    Tests reset it with ``get_settings.cache_clear()``.
    """
    return Settings()
