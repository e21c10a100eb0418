from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All values come from .env file or environment. Validated at startup;
    missing required values cause an immediate error with a clear message.
    """

    # Database
    DATABASE_URL: str  # async driver (asyncpg)
    DATABASE_URL_SYNC: str  # sync driver (for Alembic CLI)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Auth: the upstream gateway authenticates the caller and forwards their id
    AUTH_USER_HEADER: str = "X-User-ID"

    # App
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
