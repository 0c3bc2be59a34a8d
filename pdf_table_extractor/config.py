from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_ENDPOINT = 'http://localhost:8000/upload-pdf/'


class Settings(BaseModel):
    endpoint_url: str = DEFAULT_ENDPOINT
    timeout: float = Field(default=60.0, gt=0)
    log_level: str = 'INFO'

    @field_validator('endpoint_url')
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(('http://', 'https://')):
            raise ValueError(f"endpoint must be an http(s) URL, got {value!r}")
        return value

    @field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value


def load_settings(env_file=None) -> Settings:
    """Build settings from the environment, after loading an optional .env file."""
    load_dotenv(env_file)
    values = {}
    if os.environ.get('TABLE_EXTRACTOR_ENDPOINT'):
        values['endpoint_url'] = os.environ['TABLE_EXTRACTOR_ENDPOINT']
    if os.environ.get('TABLE_EXTRACTOR_TIMEOUT'):
        values['timeout'] = os.environ['TABLE_EXTRACTOR_TIMEOUT']
    if os.environ.get('TABLE_EXTRACTOR_LOG_LEVEL'):
        values['log_level'] = os.environ['TABLE_EXTRACTOR_LOG_LEVEL']
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
