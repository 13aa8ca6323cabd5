"""
Centralized logging configuration for lock-history.

Provides structured loguru logging with consistent formatting across the
history walker, sampler and CLI.
"""

import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class LoggingManager:
    """Manages centralized logging configuration across the tool."""

    def __init__(self, service_name: str = "lock-history"):
        """
        Initialize logging manager.

        Args:
            service_name: Name of the service for logging identification
        """
        self.service_name = service_name
        self._configured = False

    @property
    def configured(self) -> bool:
        return self._configured

    def configure_logging(
        self,
        level: str = "INFO",
        enable_file_logging: bool = False,
        log_file_path: Path | None = None,
        structured_format: bool = False,
    ) -> None:
        """
        Configure logging for the entire application.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_file_logging: Whether to enable file logging
            log_file_path: Path for log file (auto-generated if None)
            structured_format: Whether to use structured JSON format
        """
        if self._configured:
            return

        # Remove default loguru handler
        logger.remove()

        logger.add(
            sys.stderr,
            format=self._get_console_format(structured_format),
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

        if enable_file_logging:
            if log_file_path is None:
                log_file_path = Path.cwd() / "logs" / f"{self.service_name}.log"

            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(log_file_path),
                format=self._get_file_format(structured_format),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="gz",
                backtrace=True,
                diagnose=False,
                serialize=structured_format,
            )

        logger.configure(extra={"service_name": self.service_name})

        self._configured = True
        logger.debug(
            "Logging configured",
            service=self.service_name,
            level=level,
            file_logging=enable_file_logging,
            structured=structured_format,
        )

    def reset(self) -> None:
        """Drop all sinks so logging can be configured again."""
        logger.remove()
        self._configured = False

    def _get_console_format(self, structured: bool) -> str:
        """Get console logging format."""
        if structured:
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level> | "
                "{extra}"
            )
        return "<level>{level: <8}</level> | <level>{message}</level>"

    def _get_file_format(self, structured: bool) -> str:
        """Get file logging format."""
        if structured:
            # JSON format handled by serialize=True
            return "{time} | {level} | {name}:{function}:{line} | {message} | {extra}"
        return (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} | {message}"
        )

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Logger bound to the component name
        """
        return logger.bind(component=name)

    def log_operation_start(self, operation: str, **kwargs) -> None:
        """Log the start of an operation with context."""
        logger.info("Operation started", operation=operation, **kwargs)

    def log_operation_complete(self, operation: str, duration: float, **kwargs) -> None:
        """Log the completion of an operation with timing."""
        logger.info(
            "Operation completed",
            operation=operation,
            duration_seconds=duration,
            **kwargs,
        )

    def log_operation_error(self, operation: str, error: Exception, **kwargs) -> None:
        """Log an operation error with context."""
        logger.error(
            "Operation failed",
            operation=operation,
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs,
        )


# Global logging manager instance
_logging_manager: LoggingManager | None = None


def get_logging_manager() -> LoggingManager:
    """Get or create the global logging manager instance."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def configure_logging(
    level: str | None = None,
    structured: bool = False,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure application logging with environment-driven defaults.

    Args:
        level: Logging level, falls back to LOG_LEVEL or WARNING
        structured: Enable structured JSON logging
        enable_file_logging: Enable file logging, falls back to ENABLE_FILE_LOGGING
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING").upper()

    if enable_file_logging is None:
        enable_file_logging = (
            os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"
        )

    get_logging_manager().configure_logging(
        level=level,
        structured_format=structured,
        enable_file_logging=enable_file_logging,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given component.

    Args:
        name: Component name (usually __name__)

    Returns:
        Configured logger instance
    """
    return get_logging_manager().get_logger(name)
