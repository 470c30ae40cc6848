"""Configuration management for objstore-tools."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "objstore-tools"
    otel_exporter_endpoint: str = "http://localhost:4317"

    request_timeout: float = 60.0
    listing_page_size: int = 1000
    download_chunk_size: int = 65536

    model_config = {
        "env_prefix": "OBJSTORE_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
