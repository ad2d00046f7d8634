from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "leadforms"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    DATABASE_URL: str
    REDIS_URL: str = "redis://localhost:6379/0"

    DEFAULT_LANGUAGE: str = "en"
    DEFAULT_SITE_ID: str = "main-site"
    FORM_PROFILE: str = "dynamic"  # simple | dynamic
    FORM_ENFORCE_REQUIRED_CHECKBOX: bool = False

    # Field-list fetch policy for the profile that retries on load failure
    FORM_FETCH_RETRIES: int = 2
    FORM_FETCH_RETRY_DELAY_SECONDS: float = 1.0

    # Collaborator API used by remote form sessions
    FORMS_API_BASE_URL: str = "http://localhost:8000"
    FORMS_API_TIMEOUT_SECONDS: float = 10.0

    LEAD_RATE_LIMIT_WINDOW_SECONDS: int = 60
    LEAD_RATE_LIMIT: int = 20

    # Compose/infra vars that may exist in shared .env
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "leadforms"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
