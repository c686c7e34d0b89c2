from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IGNORED_DIRS: list[str] = [
    "node_modules",
    "__pycache__",
    "venv",
    "env",
    "vendor",
    "dist",
    "build",
    "target",
]


class Settings(BaseSettings):
    """Runtime settings loaded from WAMI_* environment variables.

    Only the multi-project scan and log output are tunable; detection
    itself has no knobs.
    """

    model_config = SettingsConfigDict(
        env_prefix="WAMI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Console log renderer and DEBUG level instead of JSON at WARNING.
    debug: bool = False

    # How many child levels detect_all() descends below the start directory.
    scan_depth: int = Field(default=2, ge=0)

    # Directory names never descended into during detect_all(). Hidden
    # directories are always skipped.
    ignored_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_DIRS))


def get_settings() -> Settings:
    return Settings()
