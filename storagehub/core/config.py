# storagehub/core/config.py
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # left unset, boto3 falls back to its default credential chain
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    aws_s3_bucket_name: Optional[str] = None
    aws_endpoint_url: Optional[str] = None

    database_url: str = "sqlite:///./storagehub.db"

    upload_url_ttl_seconds: int = 60
    # check the object really landed before marking a file uploaded
    verify_uploads: bool = False

    log_level: str = "INFO"

    # Tell pydantic-settings to load from .env at project root
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore any extra stuff in .env
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
