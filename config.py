"""
Configuration management for yt-subs

Using pydantic-settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables with the YT_SUBS_ prefix.
The configuration is loaded once by the entry points and passed into the pipeline.
"""

import os
from pathlib import Path
from typing import Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_download_dir() -> str:
    """Default download directory: ~/Downloads/yts"""
    return str(Path.home() / "Downloads" / "yts")


class ToolsConfig(BaseSettings):
    """Configuration for the external executables"""

    model_config = SettingsConfigDict(
        env_prefix='YT_SUBS_TOOLS_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    yt_dlp: str = Field(
        default="yt-dlp",
        description="Media retrieval executable (name on PATH or absolute path)"
    )

    ffmpeg: str = Field(
        default="ffmpeg",
        description="Media transcoding executable (name on PATH or absolute path)"
    )

    cookies_from_browser: Optional[str] = Field(
        default="chrome",
        description="Browser to load YouTube cookies from; empty disables cookies"
    )

    @validator('yt_dlp', 'ffmpeg')
    def validate_executable(cls, v):
        if not v or not v.strip():
            raise ValueError("Executable name must not be empty")
        return v.strip()

    @validator('cookies_from_browser', pre=True)
    def validate_cookies_from_browser(cls, v):
        """An empty value turns the cookie option off"""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def required_executables(self) -> list:
        return [self.yt_dlp, self.ffmpeg]


class AppConfig(BaseSettings):
    """Main application configuration"""

    model_config = SettingsConfigDict(
        env_prefix='YT_SUBS_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'  # Ignore unknown environment variables
    )

    # Sub-configurations
    tools: ToolsConfig = Field(default_factory=ToolsConfig)

    download_dir: str = Field(
        default_factory=default_download_dir,
        description="Directory where subtitles and transcripts are written"
    )

    # Global settings
    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    @validator('download_dir')
    def validate_download_dir(cls, v):
        if not v or not v.strip():
            return default_download_dir()
        return os.path.expanduser(v.strip())


def load_config(**overrides) -> AppConfig:
    """Read configuration from the environment (and .env), applying overrides"""
    return AppConfig(**overrides)
