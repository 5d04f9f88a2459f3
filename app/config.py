from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str | None = None  # e.g. sqlite+aiosqlite:///./backoffice.db
    use_in_memory: bool = True
    sql_echo: bool = False
    log_level: str = "INFO"

    # Facturación
    invoice_number_prefix: str = "FAC"
    invoice_due_days: int = 30
    invoice_upcoming_days: int = 7

    # Solo desarrollo: carga un catálogo de ejemplo en el almacén in-memory
    seed_demo_catalog: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
