"""Configuration management for docstruct."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Output
    output_dir: str = "./output"
    output_prefix: str = "ocr-analysis"
    include_forms: bool = True
    include_tables: bool = True

    # Logging
    log_level: str = "INFO"
    log_raw_response: bool = False

    class Config:
        env_prefix = "DOCSTRUCT_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
