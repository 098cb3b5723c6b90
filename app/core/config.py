from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field, model_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    DB_NAME: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_HOST: str = "postgres"
    DB_INTERNAL_PORT: int = 5432

    # full SQLAlchemy URL, takes precedence over the DB_* parts
    DATABASE_URL: str = ""
    SQL_ECHO: bool = False

    PHOTOS_DIRECTORY: str = "photos"

    @model_validator(mode="after")
    def check_required_field_are_set(self):
        if self.DATABASE_URL:
            return self

        missing_fields = []
        if not self.DB_NAME:
            missing_fields.append("DB_NAME")
        if not self.DB_USER:
            missing_fields.append("DB_USER")
        if not self.DB_PASSWORD:
            missing_fields.append("DB_PASSWORD")

        if missing_fields:
            raise ValueError(
                f"Missing required environment variables: {','.join(missing_fields)}"
            )

        return self

    @computed_field
    @property
    def ASYNC_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@"
            f"{self.DB_HOST}:{self.DB_INTERNAL_PORT}/{self.DB_NAME}"
        )


settings = Settings()
