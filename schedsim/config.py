"""
Runtime settings, read from ``SCHEDSIM_*`` environment variables or a ``.env`` file.

Explicit arguments (registry capacity, CLI flags) always win over these
defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MAX_JOBS: int = Field(100, gt=0)        # registry capacity
    DEFAULT_QUANTUM: int = Field(2, gt=0)   # Round Robin quantum when none is given
    LOG_LEVEL: str = "WARNING"

    model_config = {
        "env_prefix": "SCHEDSIM_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
