"""Runtime configuration for response queues."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

JSON_CONTENT_TYPE = "application/json"


class ResponseSettings(BaseSettings):
    """Environment-driven response settings."""

    model_config = SettingsConfigDict(env_prefix="AJAX_RESPONSE_", env_file=".env", extra="ignore")

    character_encoding: str = Field(
        default="utf-8",
        description="Character set the wire envelope is encoded for.",
    )
    content_type: str = JSON_CONTENT_TYPE
    log_level: str = "WARNING"


settings = ResponseSettings()
