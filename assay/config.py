# assay/config.py
from pathlib import Path
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Private filesystem
    ASSAY_ROOT_DIRECTORY: Path | None = None   # pin sandboxes here instead of a temp dir
    ASSAY_TEMP_PREFIX: str = "private"
    ASSAY_WARN_ON_OVERWRITE: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
