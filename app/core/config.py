from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List

# Upper bound on in-flight per-device status requests to the cloud registry
MAX_STATUS_CONCURRENCY = 5


class Settings(BaseSettings):
    """Room status service settings, loaded once at process start"""

    # Basic settings
    APP_NAME: str = "Smart Home Room Status Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Local hub (Home Assistant) settings
    HA_BASE_URL: str = ""
    HA_TOKEN: str = ""
    HA_ENTITY_ID: str = ""

    # Display defaults
    DEFAULT_ROOM_NAME: str = ""
    DEFAULT_DEVICE_NAME: str = "Air Conditioner"

    # Cloud registry (SmartThings) settings
    SMARTTHINGS_TOKEN: str = ""
    SMARTTHINGS_API_URL: str = "https://api.smartthings.com"

    # Outbound call settings
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0
    STATUS_CONCURRENCY: int = MAX_STATUS_CONCURRENCY

    # Dashboard files
    STATIC_DIR: str = "public"

    # Security settings
    ALLOWED_HOSTS: List[str] = ["*"]
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("HA_BASE_URL", "SMARTTHINGS_API_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("STATUS_CONCURRENCY")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        if not 1 <= v <= MAX_STATUS_CONCURRENCY:
            raise ValueError(f"STATUS_CONCURRENCY must be between 1 and {MAX_STATUS_CONCURRENCY}")
        return v

    @property
    def hub_configured(self) -> bool:
        """True when every local hub setting is present"""
        return bool(self.HA_BASE_URL and self.HA_TOKEN and self.HA_ENTITY_ID)

    @property
    def smartthings_configured(self) -> bool:
        """True when the cloud registry token is present"""
        return bool(self.SMARTTHINGS_TOKEN)

    class Config:
        env_file = ".env"
        case_sensitive = True
        frozen = True
        extra = "ignore"


# Create settings instance
settings = Settings()
