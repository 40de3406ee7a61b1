"""
Logging Service - Console or file logging with configurable levels
"""
import sys
import logging
from typing import Any, Dict, Optional


class LoggingService:
    """
    Centralized logging for the clockdate process.

    Module loggers (``clockdate.core.*``, ``clockdate.ui.*``) propagate into
    the logger configured here.
    """

    def __init__(self, name: str = 'clockdate', level: str = 'INFO', log_file: Optional[str] = None):
        """
        Initialize logging service.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Write to this file instead of stdout
        """
        self._logger = logging.getLogger(name)
        self._log_file = log_file
        self._set_level(level)
        self._setup_handlers()

    def _set_level(self, level: str) -> None:
        """Set logging level from string"""
        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL
        }
        log_level = level_map.get(level.upper(), logging.INFO)
        self._logger.setLevel(log_level)

    def _setup_handlers(self) -> None:
        """Setup console (or file) handler with formatting"""
        for handler in self._logger.handlers:
            handler.close()
        self._logger.handlers.clear()

        file_error = None
        if self._log_file:
            try:
                handler = logging.FileHandler(self._log_file, encoding='utf-8')
            except OSError as e:
                file_error = e
                handler = logging.StreamHandler(sys.stdout)
        else:
            handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self._logger.level)

        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        self._logger.addHandler(handler)

        if file_error is not None:
            self._logger.warning(f"Cannot open log file {self._log_file}, logging to stdout: {file_error}")

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message"""
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message"""
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message"""
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """
        Log error message.

        Args:
            message: Error message
            exc_info: Include exception traceback
            **kwargs: Additional context
        """
        self._logger.error(message, exc_info=exc_info, extra=kwargs)

    def critical(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """Log critical message"""
        self._logger.critical(message, exc_info=exc_info, extra=kwargs)

    def log_startup(self, version: str, variant: str, summary: Dict[str, Any]) -> None:
        """
        Log application startup information.

        Args:
            version: Application version
            variant: Presentation variant ('overlay' or 'terminal')
            summary: Configuration summary from Config.summary()
        """
        self.info("=" * 60)
        self.info(f"clockdate v{version} starting up ({variant})")
        self.info(f"Python: {sys.version.split()[0]}")
        for key, value in summary.items():
            self.info(f"{key.capitalize()}: {value}")
        self.info("=" * 60)

    def log_shutdown(self) -> None:
        """Log application shutdown"""
        self.info("=" * 60)
        self.info("clockdate shutting down")
        self.info("=" * 60)

    @property
    def level(self) -> int:
        return self._logger.level

    @property
    def logger(self) -> logging.Logger:
        """Get underlying logger instance"""
        return self._logger


# Global singleton instance
_logging_service: Optional[LoggingService] = None


def get_logger(name: str = 'clockdate', level: str = 'INFO', log_file: Optional[str] = None) -> LoggingService:
    """
    Get or create logging service singleton.

    Args:
        name: Logger name
        level: Log level
        log_file: Optional log file path

    Returns:
        LoggingService instance
    """
    global _logging_service
    if _logging_service is None:
        _logging_service = LoggingService(name, level, log_file)
    return _logging_service
