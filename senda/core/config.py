from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Senda"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        description="List of allowed CORS origins. Configure in .env",
    )

    # --- Geocoding (Nominatim) ---
    GEOCODE_BASE_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODE_USER_AGENT: str = "SendaApp/1.0"
    GEOCODE_EMAIL: Optional[str] = None
    GEOCODE_COUNTRY: Optional[str] = "ar"
    GEOCODE_TIMEOUT: int = 8
    GEOCODE_LIMIT: int = 1

    # --- Asistente IA (Gemini) ---
    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL_URL: str = (
        "https://generativelanguage.googleapis.com/v1/models/"
        "gemini-1.5-flash:generateContent"
    )
    GEMINI_TIMEOUT: int = 20

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "production":
            if v is None:
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, str) and v.strip() in ("", "[]"):
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, list) and len(v) == 0:
                return ["http://localhost:5173", "http://localhost:3000"]
        return v

    @field_validator("GEOCODE_LIMIT", mode="after")
    @classmethod
    def validate_geocode_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("GEOCODE_LIMIT must be >= 1")
        return v


@dataclass(frozen=True)
class GeocodingClientConfig:
    """Explicit configuration injected into the lookup and assistant clients.

    Built once from ``Settings`` at the application edge so the resolution
    logic never reads the environment itself.
    """

    lookup_service_base_url: str
    lookup_user_agent: str
    ai_assistant_endpoint: str
    ai_assistant_api_key: Optional[str] = None
    lookup_email: Optional[str] = None
    lookup_country: Optional[str] = None
    lookup_limit: int = 1
    lookup_timeout: int = 8
    ai_assistant_timeout: int = 20

    @classmethod
    def from_settings(cls, source: Settings) -> "GeocodingClientConfig":
        api_key = source.GEMINI_API_KEY
        return cls(
            lookup_service_base_url=source.GEOCODE_BASE_URL,
            lookup_user_agent=source.GEOCODE_USER_AGENT,
            ai_assistant_endpoint=source.GEMINI_MODEL_URL,
            ai_assistant_api_key=api_key.get_secret_value() if api_key else None,
            lookup_email=source.GEOCODE_EMAIL,
            lookup_country=source.GEOCODE_COUNTRY,
            lookup_limit=source.GEOCODE_LIMIT,
            lookup_timeout=source.GEOCODE_TIMEOUT,
            ai_assistant_timeout=source.GEMINI_TIMEOUT,
        )


settings = Settings()
