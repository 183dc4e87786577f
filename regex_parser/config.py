"""Centralized configuration management using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Defines application settings, loaded from environment variables or .env file.

    Attributes
    ----------
    log_level : str
        Logger level name used when no verbosity flag is given.
    definitions_dirs : list of str
        Directories searched for parser definition files.
    default_plugin : str
        Plugin used by definitions built from command-line options.
    workers : int
        Threads used to parse lines concurrently.
    """

    log_level: str = "INFO"
    definitions_dirs: List[str] = ["parser_definitions"]
    default_plugin: str = "regex-rs"
    workers: int = 1

    model_config = SettingsConfigDict(
        env_prefix="REGEX_PARSER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
