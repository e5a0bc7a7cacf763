"""
Configuration loaded from the environment (and a `.env` file, if present).

    RUNLEDGER_PRECISION   decimal places shown when printing values (default 2)
    RUNLEDGER_LOG_LEVEL   logging level name (default WARNING)
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from runledger.printer import DEFAULT_PRECISION

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')

_ENV_VARS = {
    'precision': 'RUNLEDGER_PRECISION',
    'log_level': 'RUNLEDGER_LOG_LEVEL',
}


class Settings(BaseModel):
    """Runtime settings for the command-line tool."""
    precision: int = Field(DEFAULT_PRECISION, ge=0, le=10, description="Decimal places shown when printing")
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        name = v.strip().upper()
        if name not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return name


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> Settings:
    """Build settings from the environment; non-None `overrides` win.

    Raises pydantic.ValidationError for out-of-range or unknown values.
    """
    dotenv_path = env_file or find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)
    values: Dict[str, Any] = {}
    for field, var in _ENV_VARS.items():
        raw = os.getenv(var)
        if raw is not None and raw.strip():
            values[field] = raw.strip()
    for field, value in overrides.items():
        if value is not None:
            values[field] = value
    return Settings(**values)
