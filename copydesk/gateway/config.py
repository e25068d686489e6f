import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    cors_origins: list[str] = ["*"]

    # Bodies are bounded here because the scanner has no internal limit
    max_body_chars: int = 200_000

    log_dir: Path = Path("logs")
    log_level: str = "INFO"
    json_logs: bool = True  # If False: stdout only, no JSONL file sink

    model_config = SettingsConfigDict(
        env_prefix="COPYDESK_",
        env_file=[os.getenv("ENV_FILE", ""), ".env"],
        extra="ignore",
        env_nested_delimiter="__",
    )


def get_settings() -> Settings:  # ty: ignore[invalid-return-type]
    """This is only used for dependency references, see __init__.py:

    app.dependency_overrides[get_settings] = lambda: settings
    """
    ...
