import os
from pydantic_settings import BaseSettings

MIGRATIONS_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")


class Settings(BaseSettings):
    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080
    SERVER_MODE: str = "debug"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # PostgreSQL
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "jobsolution"
    POSTGRES_SSLMODE: str = "disable"
    POSTGRES_POOL_SIZE: int = 25
    POSTGRES_MAX_OVERFLOW: int = 0
    POSTGRES_POOL_RECYCLE_SECONDS: int = 300

    # Overrides the POSTGRES_* settings when set
    DATABASE_URL: str = ""

    # Migrations
    RUN_MIGRATIONS: bool = True
    MIGRATIONS_DIR: str = MIGRATIONS_PATH

    # JWT
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    PASSWORD_RESET_EXPIRE_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    # Rate limiting, shared by the whole server
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_DURATION_SECONDS: float = 60

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            f"?sslmode={self.POSTGRES_SSLMODE}"
        )

    @property
    def is_release(self) -> bool:
        return self.SERVER_MODE == "release"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
