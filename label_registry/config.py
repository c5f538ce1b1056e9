from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Literal, Optional


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Etiquetas"
    DEBUG: bool = False
    ALLOWED_ORIGINS: str = "*"

    # Server
    # Default to 0.0.0.0 for container deployments, use env var HOST to restrict
    HOST: str = "0.0.0.0"  # nosec: B104
    PORT: int = 3201

    # Barcode numbering
    BARCODE_PREFIX: str = "KIOSCO-922-"
    BARCODE_DIGITS: int = Field(default=5, ge=0)
    STATE_MODE: Literal["derived", "stored"] = "derived"

    # Access guard (x-api-key header); disabled when empty
    API_KEY: Optional[str] = None

    # Storage
    DATA_DIR: str = "./data"
    DATA_FILE_NAME: str = "db.json"
    PUBLIC_DIR: str = "./public"

    # Logging
    LOG_DIR: Optional[str] = None

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def stored_mode(self) -> bool:
        return self.STATE_MODE == "stored"

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()
