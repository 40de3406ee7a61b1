"""
Configuration Service - TOML config discovery with per-field defaults
"""
import logging
import os
from pathlib import Path
from typing import Annotated, Any, Dict, List, Mapping, Optional

import tomli
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError


APP_NAME = 'clockdate'
CONFIG_FILE_NAME = 'config.toml'

DEFAULT_TIME_COLOR = 'Blue'
DEFAULT_DATE_COLOR = 'DarkGray'

I32_MIN = -2 ** 31
I32_MAX = 2 ** 31 - 1

# TOML booleans and floats are not integers
I32 = Annotated[int, Field(strict=True, ge=I32_MIN, le=I32_MAX)]

logger = logging.getLogger(__name__)


class ConfigNotFoundError(LookupError):
    """No candidate location yielded a valid configuration."""


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ColorConfig(_Section):
    """Color tokens for the two blocks. No per-field defaults."""
    time: StrictStr
    date: StrictStr

    @classmethod
    def default(cls) -> 'ColorConfig':
        return cls(time=DEFAULT_TIME_COLOR, date=DEFAULT_DATE_COLOR)


class WindowConfig(_Section):
    margin_top: I32 = 10
    margin_right: I32 = 10
    width: I32 = 400
    height: I32 = 180
    target_display: StrictStr = Field('DP-1', alias='monitor')
    date_vertical_offset: I32 = Field(-65, alias='date_offset')


class FontConfig(_Section):
    time_size: I32 = 12
    date_size: I32 = 10


class LoggingConfig(_Section):
    level: StrictStr = 'INFO'
    file: Optional[StrictStr] = None


class Config(_Section):
    """Complete, immutable application configuration."""
    colors: ColorConfig
    window: WindowConfig = Field(default_factory=WindowConfig)
    fonts: FontConfig = Field(default_factory=FontConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> 'Config':
        return cls(colors=ColorConfig.default())

    def summary(self) -> Dict[str, Any]:
        """Configuration summary for the startup log"""
        return {
            'canvas': f"{self.window.width}x{self.window.height}",
            'monitor': self.window.target_display,
            'fonts': f"time={self.fonts.time_size}pt date={self.fonts.date_size}pt",
            'colors': f"time={self.colors.time} date={self.colors.date}",
        }


class ConfigService:
    """
    Locates and loads the configuration file.

    Search order:
    1. $HOME/.config/clockdate/config.toml
    2. ./config.toml
    The first candidate that reads and validates wins.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            environ: Environment mapping (default: os.environ)
        """
        self._environ = os.environ if environ is None else environ

    def candidate_paths(self) -> List[Path]:
        """Ordered list of config file locations to try"""
        paths = []

        home = self._environ.get('HOME')
        if home is not None:
            paths.append(Path(f"{home}/.config/{APP_NAME}/{CONFIG_FILE_NAME}"))

        try:
            paths.append(Path.cwd() / CONFIG_FILE_NAME)
        except OSError as e:
            logger.debug(f"Skipping working directory config: {e}")

        return paths

    def _load_path(self, path: Path) -> Config:
        content = path.read_text(encoding='utf-8')
        return Config.model_validate(tomli.loads(content))

    def load(self) -> Config:
        """
        Load the first valid configuration.

        Raises:
            ConfigNotFoundError: If no candidate yields a valid configuration
        """
        for path in self.candidate_paths():
            try:
                config = self._load_path(path)
            except (OSError, UnicodeDecodeError, tomli.TOMLDecodeError, ValidationError) as e:
                logger.debug(f"Config candidate {path} skipped: {e}")
                continue

            logger.debug(f"Loaded config from {path}")
            return config

        raise ConfigNotFoundError("Config file not found")

    def load_or_default(self) -> Config:
        """Load configuration, falling back to built-in defaults"""
        try:
            return self.load()
        except ConfigNotFoundError:
            logger.debug("No config file found, using defaults")
            return Config.default()
