"""Configuration loading for the graph visualizer."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field


class EditorConfig(BaseModel):
    history_capacity: int = Field(default=50, ge=1)
    max_nodes: int = Field(default=20, ge=1)


class PlaybackConfig(BaseModel):
    default_speed: float = 1.0   # steps per second
    min_speed: float = 0.25
    max_speed: float = 3.0


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    secret_key: str = "graph-visualizer-dev-key"
    log_level: str = "INFO"
    session_idle_timeout: float = Field(default=1800.0, gt=0)   # seconds


class Config(BaseModel):
    editor: EditorConfig = Field(default_factory=EditorConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def _project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: Dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
