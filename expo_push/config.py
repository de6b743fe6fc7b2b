"""Client configuration using pydantic-settings.

Only callers (the CLI, application code) read settings from the environment;
``PushNotifier`` itself is configured with explicit arguments.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PUSH_URL = "https://exp.host/--/api/v2/push/send"
DEFAULT_RECEIPTS_URL = "https://exp.host/--/api/v2/push/getReceipts"

# Documented server-side ceilings
MAX_CHUNK_SIZE = 100
MAX_RECEIPT_IDS = 1000

DEFAULT_GZIP_THRESHOLD = 1024


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXPO_PUSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Endpoints
    push_url: str = DEFAULT_PUSH_URL
    receipts_url: str = DEFAULT_RECEIPTS_URL

    # Enhanced push security access token
    access_token: SecretStr | None = None

    # Batching
    chunk_size: int = Field(MAX_CHUNK_SIZE, gt=0)
    receipt_chunk_size: int = Field(MAX_RECEIPT_IDS, gt=0)

    # Request body compression
    gzip_policy: Literal["threshold", "never", "always"] = "threshold"
    gzip_threshold: int = Field(DEFAULT_GZIP_THRESHOLD, ge=0)

    timeout_seconds: float = 30.0
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
