from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Uploads
    upload_max_size_mb: int = 25

    # Groq description enhancement
    groq_api_key: str | None = None
    groq_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 4000
    llm_timeout_seconds: float = 30.0
    llm_max_retries: int = 1

    # Text extraction
    row_tolerance: float = 5.0

    # Parsing
    max_block_lines: int = 40
    nayapay_detection_threshold: int = 2
    hbl_detection_threshold: int = 3

    # Validation
    high_transaction_count: int = 1000
    max_invalid_row_ratio: float = 0.5

    # Import hand-off
    import_batch_size: int = 50


settings = Settings()
