"""Configuración de la aplicación mediante variables de entorno."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración cargada desde .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Gestión DECE API"
    debug: bool = False
    log_level: str = "INFO"

    # Almacenamiento: "sqlite" (archivo local) o "postgresql"
    db_backend: str = "sqlite"
    sqlite_path: str = "dece.db"

    postgres_host: str = "127.0.0.1"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "gestion_dece_bd"

    # Agenda
    hora_inicio_defecto: str = "09:00"
    hora_fin_defecto: str = "18:00"
    hora_almuerzo: int = 13
    duracion_cita_minutos: int = 30

    # Casos
    dias_vencimiento_caso: int = 30
    dias_seguimiento_violencia: int = 75

    @property
    def es_sqlite(self) -> bool:
        return self.db_backend.strip().lower() == "sqlite"

    @property
    def database_url_async(self) -> str:
        """URL para SQLAlchemy con driver asíncrono (aiosqlite o asyncpg)."""
        if self.es_sqlite:
            return f"sqlite+aiosqlite:///{self.sqlite_path}"
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
