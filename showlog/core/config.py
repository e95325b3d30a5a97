# showlog/core/config.py

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (Docker Compose passes the
    # root .env through), so there is no env_file directive here.
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Database URLs ---
    DATABASE_URL_PROD: str = "postgresql://showlog:showlog@db:5432/showlog_db"
    DATABASE_URL_LOCAL: str = "sqlite:///./showlog.db"

    # --- Auth ---
    JWT_SECRET: str = "change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"

    # --- Media storage ---
    # 'local' writes under MEDIA_ROOT and serves it at MEDIA_URL_PREFIX,
    # 's3' writes to AWS_S3_BUCKET_NAME.
    MEDIA_BACKEND: str = "local"
    MEDIA_ROOT: str = "./uploads"
    MEDIA_URL_PREFIX: str = "/uploads"

    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_S3_BUCKET_NAME: str | None = None
    AWS_S3_REGION: str = "us-east-1"
    AWS_S3_ENDPOINT_URL: str | None = None

    # Comma separated list of allowed browser origins
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:1995"

    LOG_LEVEL: str = "INFO"

    # Turn off to run the API without request throttling (e.g. in tests)
    RATE_LIMIT_ENABLED: bool = True

    # --- Dynamic Properties ---
    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Create a single instance of the settings
settings = Settings()
