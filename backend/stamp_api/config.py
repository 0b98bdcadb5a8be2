from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    pinata_jwt: str = ""
    pinata_api_url: str = "https://api.pinata.cloud"
    pinata_gateway: str = "gateway.pinata.cloud"

    image_upload_timeout_seconds: float = 30.0
    metadata_upload_timeout_seconds: float = 10.0

    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = "production"
    cors_origins: str = "*"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @property
    def cors_origin_list(self) -> list[str]:
        if not self.cors_origins.strip():
            return ["*"]
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
