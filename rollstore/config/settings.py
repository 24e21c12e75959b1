"""
Store settings read from ROLLSTORE_* environment variables or a .env file.
"""

from pathlib import Path
from typing import Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    # =========================
    # Backing storage
    # =========================
    data_file: Path = Path("student_records.dat")
    # created beside data_file so the final rename stays on one filesystem
    temp_file_name: str = "temp_records.dat"

    # =========================
    # Behaviour
    # =========================
    enforce_unique_keys: bool = False

    # =========================
    # Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("temp_file_name")
    @classmethod
    def _bare_name(cls, v: str) -> str:
        if not v or Path(v).name != v:
            raise ValueError(f"temp_file_name must be a bare file name, got {v!r}")
        return v

    @property
    def temp_file(self) -> Path:
        return self.data_file.parent / self.temp_file_name

    model_config = SettingsConfigDict(
        env_prefix="ROLLSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
