from typing import List, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlotTemplateConfig(BaseModel):
    code: str
    start_time: str  # "HH:MM" or "HH:MM:SS", local to CINEMA_TIMEZONE
    end_time: str
    position: int
    is_active: bool = True


DEFAULT_SLOT_TEMPLATES = [
    SlotTemplateConfig(code="morning", start_time="10:00", end_time="12:00", position=1),
    SlotTemplateConfig(code="afternoon", start_time="14:00", end_time="16:00", position=2),
    SlotTemplateConfig(code="evening", start_time="18:00", end_time="20:00", position=3),
    SlotTemplateConfig(code="night", start_time="22:00", end_time="23:30", position=4),
]


class Settings(BaseSettings):
    PROJECT_NAME: str = "Residence Cinema API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "12345"
    POSTGRES_DB: str = "residence_db"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""
    DB_STATEMENT_TIMEOUT_MS: Optional[int] = None
    SQL_ECHO: bool = False

    # Cinema room
    CINEMA_TIMEZONE: str = "UTC"
    SLOT_TEMPLATES: List[SlotTemplateConfig] = DEFAULT_SLOT_TEMPLATES
    MAX_PEOPLE_PER_RESERVATION: int = 12
    HOUSEHOLD_FREE_RESERVATIONS: int = 5
    MAX_FREE_INTERVAL_WINDOW_HOURS: int = 24 * 7

    # Background pre-materialization of upcoming days
    SLOT_PREMATERIALIZE_DAYS: int = 7
    SLOT_MATERIALIZE_INTERVAL_SECONDS: int = 60 * 60

    TRACING_ENABLED: bool = False

    # Env vars are picked up automatically; SLOT_TEMPLATES is read as JSON.
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
