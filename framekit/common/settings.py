# framekit/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from framekit.common.strings.splitters import csv_to_list
from framekit.domain.enums.policies import AspectSource, PadOffsetRounding


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"


class FFmpegConfig(BaseModel):
    bin: str = "ffmpeg"
    normalize_bin: str = "normalize-audio"
    # applies to transcode, audio extraction and normalization runs
    timeout_sec: int = Field(600, ge=1)
    probe_timeout_sec: int = Field(30, ge=1)


class TranscodeDefaults(BaseModel):
    """Fixed defaults layered under per-call ProcessorOptions."""
    time_offset: float = Field(3.0, ge=0)
    pad_color: str = "black"
    strict: bool = True
    normalize_audio: bool = False
    aspect_source: AspectSource = AspectSource.display
    pad_offset_rounding: PadOffsetRounding = PadOffsetRounding.integer
    image_formats: List[str] = Field(default_factory=lambda: ["jpg", "jpeg", "png", "gif", "webp", "bmp"])

    @field_validator("strict", "normalize_audio", mode="before")
    @classmethod
    def _boolify(cls, v):
        return v if v is None else _to_bool(v)

    @field_validator("image_formats", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v, lower=True)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "framekit"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Paths & layout --------
    media_root: Path = Path("/srv/framekit/media")
    output_subdir: str = "derived"
    temp_subdir: str = ".tmp"

    max_probe_workers: int = Field(8, ge=1, le=64, description="Upper bound for probe_batch workers")

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    ffmpeg: FFmpegConfig = FFmpegConfig()
    transcode: TranscodeDefaults = TranscodeDefaults()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FRAMEKIT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Derived paths =====
    @computed_field  # type: ignore[misc]
    @property
    def output_root(self) -> Path:
        return self.media_root / self.output_subdir

    @computed_field  # type: ignore[misc]
    @property
    def temp_root(self) -> Path:
        return self.media_root / self.temp_subdir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from framekit.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
