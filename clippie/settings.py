#!/usr/bin/env python3
"""
Clippie Settings Management
Loads and validates settings from config.yml using Pydantic
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("clippie.Settings")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseModel):
    """Database location settings"""
    path: Optional[str] = Field(
        default=None,
        description="Database file location; default location when unset"
    )


class DaemonSettings(BaseModel):
    """Clipboard monitoring settings"""
    poll_interval: float = Field(
        default=0.5,
        ge=0.05,
        le=10.0,
        description="Seconds between clipboard polls (0.05-10)"
    )
    stability_window: float = Field(
        default=2.0,
        ge=0.0,
        le=30.0,
        description="Seconds a value must stay unchanged before it is recorded (0-30)"
    )
    min_content_length: int = Field(
        default=1,
        ge=1,
        le=1000,
        description="Minimum stripped length of a value worth recording (1-1000)"
    )


class BrowserSettings(BaseModel):
    """Interactive browser settings"""
    refresh_interval: float = Field(
        default=2.0,
        ge=0.5,
        le=60.0,
        description="Seconds between automatic history refreshes (0.5-60)"
    )
    input_timeout: float = Field(
        default=0.1,
        ge=0.01,
        le=1.0,
        description="Seconds the input poller waits before emitting a tick (0.01-1)"
    )


class RetentionSettings(BaseModel):
    """Retention policy settings"""
    clear_older_than_days: int = Field(
        default=30,
        ge=1,
        le=3650,
        description="Age in days removed by 'clippie clear' (1-3650)"
    )


class LoggingSettings(BaseModel):
    """Logging settings"""
    level: str = Field(default="INFO", description="Log level name")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept any standard level name, case-insensitively"""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}")
        return level


class Settings(BaseModel):
    """Main settings model"""
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    daemon: DaemonSettings = Field(default_factory=DaemonSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    retention: RetentionSettings = Field(default_factory=RetentionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SettingsManager:
    """Manages loading and accessing settings"""

    def __init__(self, config_path: Path):
        """
        Initialize settings manager

        Args:
            config_path: Path to config.yml file
        """
        self.config_path = Path(config_path)
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        """Load and validate settings from YAML file"""
        try:
            if not self.config_path.exists():
                logger.info(f"Settings file not found at {self.config_path}, using defaults")
                return Settings()

            with open(self.config_path, 'r') as f:
                config_data = yaml.safe_load(f)

            if config_data is None:
                logger.info("Settings file is empty, using defaults")
                return Settings()

            settings = Settings(**config_data)
            logger.info(f"Loaded settings from {self.config_path}")
            return settings

        except yaml.YAMLError as e:
            logger.warning(f"Error parsing settings YAML: {e}")
            logger.warning("Using default settings")
            return Settings()
        except Exception as e:
            logger.warning(f"Error loading settings: {e}")
            logger.warning("Using default settings")
            return Settings()

    def exists(self) -> bool:
        """Whether a settings file has been written (i.e. setup has run)"""
        return self.config_path.exists()

    @property
    def db_path(self) -> Optional[str]:
        """Get the configured database path override"""
        return self.settings.database.path

    @property
    def poll_interval(self) -> float:
        return self.settings.daemon.poll_interval

    @property
    def stability_window(self) -> float:
        return self.settings.daemon.stability_window

    @property
    def min_content_length(self) -> int:
        return self.settings.daemon.min_content_length

    @property
    def refresh_interval(self) -> float:
        return self.settings.browser.refresh_interval

    @property
    def input_timeout(self) -> float:
        return self.settings.browser.input_timeout

    @property
    def clear_older_than_days(self) -> int:
        return self.settings.retention.clear_older_than_days

    @property
    def log_level(self) -> str:
        return self.settings.logging.level

    def update_settings(self, **kwargs):
        """Update settings and save to file"""
        for key, value in kwargs.items():
            if '.' in key:
                # Handle nested settings like 'database.path'
                parts = key.split('.')
                obj = self.settings
                for part in parts[:-1]:
                    obj = getattr(obj, part)
                setattr(obj, parts[-1], value)
            else:
                setattr(self.settings, key, value)

        self.save()

    def save(self):
        """Save current settings to YAML file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        config_data = self.settings.model_dump()
        with open(self.config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False)
