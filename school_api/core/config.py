from pydantic_settings import BaseSettings, SettingsConfigDict


"""Configuration settings using pydantic BaseSettings. - config"""


class Settings(BaseSettings):
    """Application settings.

    - Reads configuration from environment variables and a local .env file
    - Fields: db_host, db_user, db_password, db_name, db_port, db_conn_limit
      plus server related configuration: host, port, log_level
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # PostgreSQL connection parameters (DB_HOST, DB_USER, ...)
    db_host: str = "localhost"
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "schooldb"
    db_port: int = 5432

    # Maximum number of pooled connections; extra requests wait for a free one
    db_conn_limit: int = 10

    # Address and port uvicorn binds to when started with `python -m school_api`
    host: str = "0.0.0.0"
    port: int = 3000

    log_level: str = "INFO"


def get_settings() -> Settings:
    """Return a Settings instance for dependency injection. - get_settings"""
    return Settings()
