from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from marl.pipeline.fetcher import DEFAULT_REMOTE_URL, DEFAULT_USER_AGENT


def _default_data_dir() -> Path:
    return Path(user_data_dir("marl", "bednarczyk"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MARL_", extra="ignore")

    data_dir: Path = Field(default_factory=_default_data_dir)
    cache_filename: str = "arls.json"

    # Remote document
    remote_url: str = DEFAULT_REMOTE_URL
    timeout_s: float = 30.0
    max_retries: int = 2
    backoff_s: float = 0.6
    user_agent: str = DEFAULT_USER_AGENT

    # Downloader configs
    streamrip_config_path: Path | None = None

    @property
    def cache_path(self) -> Path:
        return self.data_dir / self.cache_filename

    @property
    def resolved_streamrip_config_path(self) -> Path:
        if self.streamrip_config_path:
            return self.streamrip_config_path
        return Path(user_config_dir("streamrip")) / "config.toml"
