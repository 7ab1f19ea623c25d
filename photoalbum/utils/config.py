from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DB_PATH: str = Field("db.json", description="JSON document backing the store")
    UPLOAD_DIR: str = Field("uploaded", description="Directory for uploaded files")
    MAX_UPLOAD_BYTES: int = 15 * 1024 * 1024  # 15MB
    JWT_SECRET: str = Field("dev-secret-key", description="JWT secret key")
    ACCESS_TOKEN_EXPIRES_MIN: int = 60 * 24
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: Union[str, List[str]] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
